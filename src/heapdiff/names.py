"""
Class name normalization.

`jcmd GC.class_histogram` prints class names in JVM internal form: arrays are
encoded with one leading ``[`` per dimension, primitive arrays use a single
type letter (``[I``) and reference arrays wrap the element class
(``[Ljava.lang.String;``). JDK 9+ also appends the defining module
(``java.lang.String (java.base@11.0.2)``). This module turns those descriptors
into the names used as histogram keys: ``int[]``, ``String[]``, ``String``.
"""

from typing import Optional

PRIMITIVE_ARRAY_ALIASES = {
    "[J": "long[]",
    "[I": "int[]",
    "[B": "byte[]",
    "[C": "char[]",
    "[S": "short[]",
    "[F": "float[]",
    "[D": "double[]",
    "[Z": "boolean[]",
}

JAVA_LANG = "java.lang."
JAVA_BASE = " (java.base@"


def remove_java_base(class_name: str) -> str:
    """Strip the ``(java.base@<version>)`` module suffix, if any."""
    idx = class_name.find(JAVA_BASE)
    if idx > 0:
        return class_name[:idx]
    return class_name


def reduce_name(class_name: str) -> str:
    """
    Drop the ``java.lang.`` prefix from classes that live directly in it.

    ``java.lang.String`` becomes ``String``; ``java.lang.reflect.Method`` and
    nested types such as ``java.lang.Thread$State`` are left untouched.
    """
    if class_name.startswith(JAVA_LANG):
        reduced = class_name[len(JAVA_LANG):]
        if "." not in reduced and "$" not in reduced:
            return reduced
    return class_name


def _primitive_array_name(name: str) -> Optional[str]:
    # "[[I" -> "int[][]"; only the eight known type letters are decoded
    dimensions = len(name) - len(name.lstrip("["))
    alias = PRIMITIVE_ARRAY_ALIASES.get("[" + name[dimensions:]) if dimensions else None
    if alias is None:
        return None
    return alias + "[]" * (dimensions - 1)


def translate_name(class_name: str) -> str:
    """
    Transform a raw histogram class descriptor into its readable form.

    Args:
        class_name: Class name column of one histogram row.

    Returns:
        The canonical class name used as histogram key.

    Examples:
        >>> translate_name("[I")
        'int[]'
        >>> translate_name("[[Ljava.util.HashMap$Node; (java.base@17.0.1)")
        'java.util.HashMap$Node[][]'
        >>> translate_name("java.lang.Object")
        'Object'
    """
    name = remove_java_base(class_name)
    primitive = _primitive_array_name(name)
    if primitive is not None:
        return primitive
    if name.startswith("[") and name.endswith(";"):
        dimensions = len(name) - len(name.lstrip("["))
        # skip the "L" marker and the trailing ";"
        name = name[dimensions + 1:-1] + "[]" * dimensions
    return reduce_name(name)


def canonical_type_name(python_type: type) -> str:
    """
    Qualified name of a Python type in histogram key form.

    The module and qualified name are joined with ``.``, nested classes use the
    JVM ``$`` separator and builtins are reported without a module, then the
    result goes through `reduce_name`.
    """
    qualname = python_type.__qualname__.replace(".<locals>.", "$").replace(".", "$")
    module = python_type.__module__
    if not module or module == "builtins":
        return reduce_name(qualname)
    return reduce_name(f"{module}.{qualname}")
