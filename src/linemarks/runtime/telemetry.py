"""telelog-backed logging for linemarks.

``get_logger`` hands out cached loggers, ``record_event`` writes one
``event::<name>`` line with key/value data, and ``span`` profiles a block and
tracks it as a component. Settings come from ``LINEMARKS_*`` environment
variables; ``configure(preset="quiet")`` silences the console for the TUI.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "LINEMARKS_"
DEFAULT_LOGGER_NAME = "linemarks"
PRESETS = ("quiet",)

_loggers: MutableMapping[str, Any] = {}
_config: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(ENV_PREFIX + name)


def _env_flag(name: str) -> bool:
    return (_env(name) or "").lower() in {"1", "true", "yes", "on"}


def _text(value: Any) -> str:
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return value if isinstance(value, str) else str(value)


def _build_config(preset: Optional[str] = None) -> Any:
    config = tl.Config()
    quiet = preset == "quiet"
    # Console output would draw over the Textual screen.
    console = not quiet and not _env_flag("DISABLE_CONSOLE")

    config.with_min_level("WARNING" if quiet else (_env("LOG_LEVEL") or "INFO").upper())
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))
    if _env_flag("LOG_JSON"):
        config.with_json_format(True)
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    config.with_profiling(True)
    return config


def configure(*, preset: Optional[str] = None) -> None:
    """Rebuild the telelog config from the environment, optionally with a preset.

    Loggers handed out earlier keep their old settings; later ``get_logger``
    calls pick up the new ones.
    """

    global _config
    if preset is not None and preset not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'.")
    _config = _build_config(preset)
    _loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _config
    key = name or DEFAULT_LOGGER_NAME
    logger = _loggers.get(key)
    if logger is None:
        if _config is None:
            _config = _build_config()
        logger = _loggers[key] = tl.Logger.with_config(key, _config)
    return logger


def _log(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here is reported if the block fails."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _log(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block, optionally tracked as a component.

    ``component=True`` uses ``name`` as the component. ``metadata`` becomes
    logger context while the block runs. Exceptions are logged through
    ``SpanHandle.fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context: List[Tuple[str, str]] = [
        (key, _text(value)) for key, value in (metadata or {}).items()
    ]
    handle = SpanHandle(log, name, component_name, dict(context))

    with ExitStack() as stack:
        for key, value in context:
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
