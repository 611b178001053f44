class PathError(ValueError):
    pass
