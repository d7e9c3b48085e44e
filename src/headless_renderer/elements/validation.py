"""Shape predicates for caller-supplied trees and containers.

The predicates never raise; :func:`validate` turns a failed predicate into a
``ValidationError`` that names the offending argument.
"""

from typing import Any, Callable

from headless_renderer.elements.element import Element
from headless_renderer.shared.exceptions import ValidationError


def is_element(value: Any) -> bool:
    """Check if ``value`` is ``None``, a string, or an Element."""
    return value is None or isinstance(value, (str, Element))


def is_element_or_elements(value: Any) -> bool:
    """Check if ``value`` is an element or an arbitrarily nested list of them."""
    if is_element(value):
        return True
    return isinstance(value, (list, tuple)) and all(
        is_element_or_elements(item) for item in value
    )


def is_container(value: Any) -> bool:
    """Check if ``value`` exposes a ``container_info`` attribute."""
    return value is not None and hasattr(value, "container_info")


def is_callable(value: Any) -> bool:
    """Check if ``value`` can be invoked."""
    return callable(value)


def validate(predicate: Callable[[Any], bool], value: Any, argument: str) -> Any:
    """Return ``value`` if it satisfies ``predicate``, otherwise raise.

    Args:
        predicate: Shape predicate such as :func:`is_container`
        value: Value to check
        argument: Name of the argument being checked, used in the error

    Returns:
        The value unchanged

    Raises:
        ValidationError: If the predicate rejects the value
    """
    if not predicate(value):
        raise ValidationError(
            f"Argument '{argument}' failed {predicate.__name__}: "
            f"got {type(value).__name__} {value!r}",
            argument=argument,
            value=value,
        )
    return value

