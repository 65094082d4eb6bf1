"""Option values configuring the built-in HTTP traffic modifier."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields

__all__ = [
    "HeaderFilter",
    "BasicAuthFilter",
    "HashFilter",
    "HeaderValue",
    "ParamValue",
    "URLRewrite",
    "HeaderRewrite",
    "URLPattern",
    "HeaderFilters",
    "BasicAuthFilters",
    "HashFilters",
    "HeaderSetters",
    "ParamSetters",
    "MethodList",
    "URLRewrites",
    "HeaderRewrites",
    "URLPatterns",
    "ModifierConfig",
]

_UINT32_MASK = 0xFFFFFFFF
_OCTAL = re.compile(r"[+-]?0[0-7]+")


def _compile(pattern: str) -> re.Pattern[bytes]:
    try:
        return re.compile(pattern.encode())
    except re.error as exc:
        raise ValueError(f"invalid regular expression {pattern!r}: {exc}") from exc


def _parse_int_auto_base(text: str) -> int:
    """Parse an integer with base taken from its prefix; 0 on failure."""
    try:
        return int(text, 0)
    except ValueError:
        if _OCTAL.fullmatch(text):
            return int(text, 8)
        return 0


def _parse_unsigned(text: str) -> int:
    return int(text) if text.isascii() and text.isdigit() else 0


@dataclass(frozen=True)
class HeaderFilter:
    name: bytes
    pattern: re.Pattern[bytes]


@dataclass(frozen=True)
class BasicAuthFilter:
    pattern: re.Pattern[bytes]


@dataclass(frozen=True)
class HashFilter:
    name: bytes
    percent: int


@dataclass(frozen=True)
class HeaderValue:
    name: str
    value: str


@dataclass(frozen=True)
class ParamValue:
    name: bytes
    value: bytes


@dataclass(frozen=True)
class URLRewrite:
    src: re.Pattern[bytes]
    target: bytes


@dataclass(frozen=True)
class HeaderRewrite:
    header: bytes
    src: re.Pattern[bytes]
    target: bytes


@dataclass(frozen=True)
class URLPattern:
    pattern: re.Pattern[bytes]


class HeaderFilters(list[HeaderFilter]):
    """Header name and regexp pairs, given as ``name:regexp``."""

    def add(self, value: str) -> None:
        parts = value.split(":", 1)
        if len(parts) < 2:
            raise ValueError("need both header and value, colon-delimited (ex. user_id:^169$)")
        self.append(HeaderFilter(parts[0].encode(), _compile(parts[1].strip())))


class BasicAuthFilters(list[BasicAuthFilter]):
    """Regexps matched against decoded basic auth credentials."""

    def add(self, value: str) -> None:
        self.append(BasicAuthFilter(_compile(value)))


class HashFilters(list[HashFilter]):
    """Hash based percentage limiters, given as ``name:N%`` or ``name:a/b``."""

    def add(self, value: str) -> None:
        parts = value.split(":", 1)
        if len(parts) < 2:
            raise ValueError("need both header and value, colon-delimited (ex. user_id:50%)")
        val = parts[1].strip()
        if "%" in val:
            percent = _parse_int_auto_base(val[:-1])
        elif "/" in val:
            fraction = val.split("/")
            num = _parse_unsigned(fraction[0])
            den = _parse_unsigned(fraction[1])
            percent = int(num / den * 100) if den else 0
        else:
            raise ValueError("Value should be percent and contain '%'")
        self.append(HashFilter(parts[0].encode(), percent & _UINT32_MASK))


class HeaderSetters(list[HeaderValue]):
    """Headers to set on each request, given as ``Key: Value``."""

    def add(self, value: str) -> None:
        parts = value.split(":", 1)
        if len(parts) != 2:
            raise ValueError("Expected `Key: Value`")
        self.append(HeaderValue(parts[0].strip(), parts[1].strip()))


class ParamSetters(list[ParamValue]):
    """Query parameters to set on each request, given as ``Key=Value``."""

    def add(self, value: str) -> None:
        parts = value.split("=", 1)
        if len(parts) != 2:
            raise ValueError("Expected `Key=Value`")
        self.append(ParamValue(parts[0].strip().encode(), parts[1].strip().encode()))


class MethodList(list[bytes]):
    """HTTP methods allowed through."""

    def add(self, value: str) -> None:
        self.append(value.encode())


class URLRewrites(list[URLRewrite]):
    """URL rewrite rules, given as ``regexp:target``."""

    def add(self, value: str) -> None:
        parts = value.split(":", 1)
        if len(parts) < 2:
            raise ValueError("need both src and target, colon-delimited (ex. /a:/b)")
        self.append(URLRewrite(_compile(parts[0]), parts[1].encode()))


class HeaderRewrites(list[HeaderRewrite]):
    """Header rewrite rules, given as ``Header: regexp,target``."""

    _USAGE = "need both header, regexp and rewrite target, colon-delimited (ex. Header: regexp,target)"

    def add(self, value: str) -> None:
        header_parts = value.split(":", 1)
        if len(header_parts) < 2:
            raise ValueError(self._USAGE)
        rule = header_parts[1].strip().split(",", 1)
        if len(rule) < 2:
            raise ValueError(self._USAGE)
        self.append(HeaderRewrite(header_parts[0].encode(), _compile(rule[0]), rule[1].encode()))


class URLPatterns(list[URLPattern]):
    """Regexps matched against request URLs."""

    def add(self, value: str) -> None:
        self.append(URLPattern(_compile(value)))


@dataclass
class ModifierConfig:
    """All options of the built-in traffic modifier."""

    url_negative_regexp: URLPatterns = field(default_factory=URLPatterns)
    url_regexp: URLPatterns = field(default_factory=URLPatterns)
    url_rewrite: URLRewrites = field(default_factory=URLRewrites)
    header_rewrite: HeaderRewrites = field(default_factory=HeaderRewrites)
    header_filters: HeaderFilters = field(default_factory=HeaderFilters)
    header_negative_filters: HeaderFilters = field(default_factory=HeaderFilters)
    header_basic_auth_filters: BasicAuthFilters = field(default_factory=BasicAuthFilters)
    header_hash_filters: HashFilters = field(default_factory=HashFilters)
    param_hash_filters: HashFilters = field(default_factory=HashFilters)
    params: ParamSetters = field(default_factory=ParamSetters)
    headers: HeaderSetters = field(default_factory=HeaderSetters)
    methods: MethodList = field(default_factory=MethodList)

    def is_empty(self) -> bool:
        """True when no option is set, so no modification is needed."""
        return all(not getattr(self, f.name) for f in fields(self))