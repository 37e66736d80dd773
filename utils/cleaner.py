import html
import re
from typing import Any

_space_re = re.compile(r"\s+")
_markup_re = re.compile(r"</?[a-zA-Z][^<>]*>")


def clean_str(value: Any) -> str | None:
    if not value:
        return None
    text = _space_re.sub(" ", str(value)).strip()
    return text or None


def sanitize_source_field(value: Any) -> str | None:
    """Turn a raw SOURCE cell into plain text ready for citation parsing.

    Entities are decoded before tags are dropped so escaped markup such as
    ``&lt;sup&gt;e&lt;/sup&gt;`` is removed too.
    """
    if not value:
        return None
    text = html.unescape(str(value))
    text = _markup_re.sub("", text)
    return clean_str(text)
