"""
Input validation for Kubeglance.

This module validates the configuration values read from the environment and
the command line before they reach the Kubernetes API.

Key Functions:
- validate_namespace: Validates a namespace name (RFC 1123 label)
- validate_label_selector: Validates label selector syntax
- validate_refresh_interval: Validates the watch mode interval
- parse_container_hints: Parses the comma-separated container hints

All validation functions raise ConfigurationError with a descriptive message
when validation fails.

Example:
    ```python
    try:
        namespace = validate_namespace("cloudbees-core")
        selector = validate_label_selector("app in (cjoc, jenkins),tier!=agent")
    except ConfigurationError as e:
        print(f"Validation failed: {e}")
    ```
"""

import math
import re
from typing import List, Tuple

from .constants import MIN_REFRESH_SECONDS
from .exceptions import ConfigurationError

_NAMESPACE_RE = re.compile(r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?$')

# Optional DNS subdomain prefix, then a name segment of up to 63 characters.
_LABEL_KEY_RE = re.compile(
    r'^([a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*/)?'
    r'[A-Za-z0-9]([-A-Za-z0-9_.]{0,61}[A-Za-z0-9])?$'
)
_LABEL_VALUE_RE = re.compile(r'^([A-Za-z0-9]([-A-Za-z0-9_.]{0,61}[A-Za-z0-9])?)?$')
_SET_TERM_RE = re.compile(r'^(?P<key>\S+)\s+(?P<op>in|notin)\s+\((?P<values>[^()]*)\)$')
_EQUALITY_RE = re.compile(r'^(?P<key>[^=!\s]+)\s*(?P<op>==|!=|=)\s*(?P<value>\S*)$')


def validate_namespace(namespace: str) -> str:
    """
    Validate a Kubernetes namespace name.

    Args:
        namespace: Namespace to validate (surrounding whitespace is trimmed)

    Returns:
        str: The trimmed namespace

    Raises:
        ConfigurationError: If the namespace is empty or not a valid RFC 1123 label
    """
    if not namespace or not namespace.strip():
        raise ConfigurationError("Namespace cannot be empty")

    namespace = namespace.strip()
    if len(namespace) > 63 or not _NAMESPACE_RE.match(namespace):
        raise ConfigurationError(f"Invalid namespace name: {namespace!r}")
    return namespace


def _split_terms(selector: str) -> List[str]:
    # Commas inside "in (a, b)" belong to the term, not the conjunction.
    terms, depth, current = [], 0, []
    for ch in selector:
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
            if depth < 0:
                raise ConfigurationError(f"Unbalanced parentheses in label selector: {selector!r}")
        if ch == ',' and depth == 0:
            terms.append(''.join(current).strip())
            current = []
        else:
            current.append(ch)
    if depth != 0:
        raise ConfigurationError(f"Unbalanced parentheses in label selector: {selector!r}")
    terms.append(''.join(current).strip())
    return terms


def _check_key(key: str, selector: str) -> None:
    if len(key) > 316 or not _LABEL_KEY_RE.match(key):
        raise ConfigurationError(f"Invalid label key {key!r} in selector {selector!r}")


def _check_value(value: str, selector: str) -> None:
    if not _LABEL_VALUE_RE.match(value):
        raise ConfigurationError(f"Invalid label value {value!r} in selector {selector!r}")


def validate_label_selector(selector: str) -> str:
    """
    Validate a label selector.

    Accepts a comma-separated conjunction of requirements, each one of
    `key=value`, `key==value`, `key!=value`, `key`, `!key`,
    `key in (v1, v2)` or `key notin (v1, v2)`.

    Args:
        selector: Label selector to validate

    Returns:
        str: The trimmed selector, unchanged otherwise

    Raises:
        ConfigurationError: If the selector is empty or malformed

    Example:
        ```python
        validate_label_selector("app.kubernetes.io/name=cloudbees-core")  # ok
        validate_label_selector("app=")  # ok, matches an empty value
        validate_label_selector("=cjoc")  # Raises ConfigurationError
        ```
    """
    if not selector or not selector.strip():
        raise ConfigurationError("Label selector cannot be empty")

    selector = selector.strip()
    for term in _split_terms(selector):
        if not term:
            raise ConfigurationError(f"Empty requirement in label selector: {selector!r}")

        set_term = _SET_TERM_RE.match(term)
        if set_term:
            _check_key(set_term.group('key'), selector)
            values = [v.strip() for v in set_term.group('values').split(',')]
            for value in values:
                _check_value(value, selector)
            continue

        equality = _EQUALITY_RE.match(term)
        if equality:
            _check_key(equality.group('key'), selector)
            _check_value(equality.group('value'), selector)
            continue

        _check_key(term[1:].strip() if term.startswith('!') else term, selector)

    return selector


def validate_refresh_interval(interval: float) -> float:
    """
    Validate the watch mode refresh interval.

    Raises:
        ConfigurationError: If the interval is not a finite number or shorter than one second
    """
    if (isinstance(interval, bool) or not isinstance(interval, (int, float))
            or not math.isfinite(interval) or interval <= 0):
        raise ConfigurationError(f"Refresh interval must be a positive number, got: {interval}")

    if interval < MIN_REFRESH_SECONDS:
        raise ConfigurationError("Refresh interval should be at least 1 second to avoid overwhelming the API")

    return float(interval)


def parse_container_hints(value: str) -> Tuple[str, ...]:
    """Split comma-separated container hints, dropping blanks; at least one is required."""
    hints = tuple(h.strip() for h in (value or "").split(',') if h.strip())
    if not hints:
        raise ConfigurationError("At least one container hint is required")
    return hints
