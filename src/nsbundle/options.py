# options.py
from __future__ import annotations

import json
from typing import Iterable, List, Mapping, Optional, Sequence

from .errors import OptionsError
from .model import Flag, FlagKind, Options, Platform


FLAG_PREFIX = "--"
COMMAND_SUFFIX = "-app"
ENV_MARKER = "env."

# words npm leaves in argv when the tool runs as `npm run ns-bundle ...`
NPM_SCRIPT_WORDS = ("run", "ns-bundle")

_SIMPLE_FLAGS = {
    "android": FlagKind.PLATFORM,
    "ios": FlagKind.PLATFORM,
    "uglify": FlagKind.UGLIFY,
    "snapshot": FlagKind.SNAPSHOT,
    "nobundle": FlagKind.NOBUNDLE,
}


# ---------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------

def classify(token: str) -> Flag:
    """Turn a raw argv token into a typed Flag."""
    if not token.startswith(FLAG_PREFIX):
        return Flag(kind=FlagKind.ARGUMENT, name=token, raw=token)

    name = token[len(FLAG_PREFIX):]
    kind = _SIMPLE_FLAGS.get(name)
    if kind is None:
        if name.endswith(COMMAND_SUFFIX):
            kind = FlagKind.COMMAND
        elif ENV_MARKER in name:
            kind = FlagKind.ENV
        else:
            kind = FlagKind.OTHER
    return Flag(kind=kind, name=name, raw=token)


def tokenize(tokens: Iterable[str]) -> List[Flag]:
    return [classify(t) for t in tokens if t not in NPM_SCRIPT_WORDS]


def npm_argv(environ: Mapping[str, str]) -> List[str]:
    """
    Original argv recorded by npm (`npm_config_argv`), if any.

    npm stores {"remain": [...], "cooked": [...], "original": [...]}; only
    "original" keeps the flags exactly as typed.
    """
    raw = environ.get("npm_config_argv")
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise OptionsError(f"Could not read npm_config_argv: {e}") from e
    if not isinstance(data, dict):
        raise OptionsError("Could not read npm_config_argv")
    return list(data.get("original") or [])


# ---------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------

def _resolve_platform(flags: Sequence[Flag]) -> Platform:
    names = {f.name for f in flags if f.kind is FlagKind.PLATFORM}
    if names == {"android", "ios"}:
        raise OptionsError("You cannot use both --android and --ios flags!")
    if "android" in names:
        return Platform.ANDROID
    if "ios" in names:
        return Platform.IOS
    raise OptionsError(
        "You must provide a target platform! Use either --android, or --ios flag."
    )


def _resolve_command(flags: Sequence[Flag]) -> Optional[str]:
    commands = [f.name for f in flags if f.kind is FlagKind.COMMAND]
    if len(commands) > 1:
        raise OptionsError(f"You can't use {', '.join(commands)} together!")
    if not commands:
        return None
    return commands[0][: -len(COMMAND_SUFFIX)]


def resolve_options(flags: Sequence[Flag]) -> Options:
    return Options(
        platform=_resolve_platform(flags),
        command=_resolve_command(flags),
        env=tuple(f.name for f in flags if f.kind is FlagKind.ENV),
        bundle=not any(f.kind is FlagKind.NOBUNDLE for f in flags),
        passthrough=tuple(f.raw for f in flags if not f.is_pipeline_flag),
    )


def has_flag(flags: Sequence[Flag], kind: FlagKind) -> bool:
    return any(f.kind is kind for f in flags)


def read_flags(tokens: Sequence[str]) -> List[Flag]:
    """Tokenize argv. No tokens at all is a configuration error."""
    if not tokens:
        raise OptionsError("No flags provided.")
    return tokenize(tokens)


def parse_argv(tokens: Sequence[str]) -> Options:
    return resolve_options(read_flags(tokens))
