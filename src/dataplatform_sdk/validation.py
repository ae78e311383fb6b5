"""Validation gate for caller-supplied parameters.

Every check raises :class:`InvalidParameterError` naming the offending
parameter and the operation, and runs before any request is built.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from dataplatform_sdk.exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

USER_ID_PARAMETER = "user_id"

_GUID_FORBIDDEN = re.compile(r"[\s/]")


def _invalid(message: str, parameter_name: str, method_name: str) -> InvalidParameterError:
    logger.debug(f"{method_name}: rejected {parameter_name}: {message}")
    return InvalidParameterError(message, parameter_name=parameter_name, method_name=method_name)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_user_id(user_id: Any, method_name: str) -> None:
    """Check the end-user identifier is present."""
    if _is_blank(user_id):
        raise _invalid(f"No user id supplied on call to {method_name}", USER_ID_PARAMETER, method_name)


def validate_guid(value: Any, parameter_name: str, method_name: str) -> None:
    """Check a unique identifier is present and usable as a single path segment."""
    if _is_blank(value):
        raise _invalid(f"The {parameter_name} parameter passed to {method_name} is null", parameter_name, method_name)
    if _GUID_FORBIDDEN.search(value):
        raise _invalid(
            f"The {parameter_name} parameter passed to {method_name} is not a valid unique identifier: {value!r}",
            parameter_name,
            method_name,
        )


def validate_name(value: Any, parameter_name: str, method_name: str) -> None:
    """Check a name (including a mandatory qualified name) is present."""
    if _is_blank(value):
        raise _invalid(f"The {parameter_name} parameter passed to {method_name} is null", parameter_name, method_name)


def validate_object(value: Any, parameter_name: str, method_name: str) -> None:
    """Check a composite argument (usually a properties model) is supplied."""
    if value is None:
        raise _invalid(f"The {parameter_name} parameter passed to {method_name} is null", parameter_name, method_name)
    if isinstance(value, (dict, list)) and not value:
        raise _invalid(f"The {parameter_name} parameter passed to {method_name} is empty", parameter_name, method_name)


def validate_search_string(value: Any, parameter_name: str, method_name: str) -> None:
    """Check a search string is present and compiles as a regular expression."""
    if _is_blank(value):
        raise _invalid(f"The {parameter_name} parameter passed to {method_name} is null", parameter_name, method_name)
    try:
        re.compile(value)
    except re.error as e:
        raise _invalid(
            f"The {parameter_name} parameter passed to {method_name} is not a valid regular expression: {e}",
            parameter_name,
            method_name,
        ) from e


def validate_paging(start_from: int, page_size: int, method_name: str, max_page_size: int = 0) -> int:
    """Validate a paging window and return the page size to send.

    A page size of 0 asks for as many results as the server allows. Page sizes
    above ``max_page_size`` are clamped; a ``max_page_size`` of 0 disables
    clamping.

    Returns:
        The effective page size.
    """
    if isinstance(start_from, bool) or not isinstance(start_from, int) or start_from < 0:
        raise _invalid(
            f"The start_from parameter passed to {method_name} must be zero or positive, not {start_from}",
            "start_from",
            method_name,
        )
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 0:
        raise _invalid(
            f"The page_size parameter passed to {method_name} must be zero or positive, not {page_size}",
            "page_size",
            method_name,
        )

    if max_page_size > 0 and (page_size == 0 or page_size > max_page_size):
        if page_size > max_page_size:
            logger.debug(f"{method_name}: page size {page_size} clamped to {max_page_size}")
        return max_page_size
    return page_size
