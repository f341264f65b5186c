"""Discovery of editable values and their call-site context."""

from locate.context import (
    FALLBACK_CALL_NAME,
    CallContext,
    resolve_structural,
    resolve_textual,
)
from locate.identity import generate_call_site_id, generate_key
from locate.locator import (
    DEFAULT_DIRECTIVE_KEYWORDS,
    discover,
    locate,
    value_offsets,
)
from locate.params import ParameterRegistry, StaticRegistry, resolve_parameter

__all__ = [
    "DEFAULT_DIRECTIVE_KEYWORDS",
    "FALLBACK_CALL_NAME",
    "CallContext",
    "ParameterRegistry",
    "StaticRegistry",
    "discover",
    "generate_call_site_id",
    "generate_key",
    "locate",
    "resolve_parameter",
    "resolve_structural",
    "resolve_textual",
    "value_offsets",
]
