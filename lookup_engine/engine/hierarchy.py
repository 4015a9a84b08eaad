"""Type hierarchy linearization."""


def linearize(leaf_type: type, include_root: bool = False) -> list[type]:
    """Return the levels of ``leaf_type`` to visit, most derived first.

    Follows the method resolution order up to, but excluding, the terminal
    ``object``, which is appended only when ``include_root`` is set.

    Examples:
        linearize(bool) -> [bool, int]
        linearize(bool, include_root=True) -> [bool, int, object]
        linearize(object) -> []
    """
    types = [cls for cls in leaf_type.__mro__ if cls is not object]
    if include_root:
        types.append(object)
    return types
