"""Serializer options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class Options:
    """Formatting and reference-tracking switches.

    `None` means "use the entry point's default": `serialize` leaves both
    switches off, `serialize_to_module` turns both on.
    """

    reference: bool | None = None  # detect values shared by identity
    beautify: bool | None = None  # one item per line, indented
    indent: str = "\t"  # one nesting level in beautify mode


OptionsLike = Options | Mapping[str, object] | None


def resolve_options(
    options: OptionsLike, overrides: dict[str, object], reference: bool, beautify: bool
) -> Options:
    """Merge caller options and keyword overrides over the given defaults."""
    if options is None:
        opts = Options()
    elif isinstance(options, Options):
        opts = options
    else:
        opts = Options(**_check_names(dict(options)))
    given = {k: v for k, v in _check_names(overrides).items() if v is not None}
    opts = replace(opts, **given)
    if opts.reference is None:
        opts = replace(opts, reference=reference)
    if opts.beautify is None:
        opts = replace(opts, beautify=beautify)
    return opts


def _check_names(values: dict[str, object]) -> dict[str, object]:
    known = {f.name for f in fields(Options)}
    for name in values:
        if name not in known:
            raise TypeError("unknown option '" + name + "'")
    return values
