"""
Loading of the external resumable upload engine.

The engine is any ASGI application implementing the resumable upload
protocol. It is built by a factory named in settings as `module:attribute`,
called as::

    factory(directory=Path, naming_function=Callable[[Headers], str], path=str)

The engine stores each upload as `<name>` plus bookkeeping artifacts in
`directory`, taking `<name>` from `naming_function`.
"""

import importlib
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Mapping, MutableMapping, Optional, Protocol

from uploads_api.config.settings import Settings
from uploads_api.storage.artifacts import UploadDirectory
from uploads_api.storage.naming import upload_name_from_headers

logger = logging.getLogger(__name__)

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
NamingFunction = Callable[[Mapping[str, str]], str]


class UploadEngine(Protocol):
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        ...


class EngineFactory(Protocol):
    def __call__(self, *, directory: Path, naming_function: NamingFunction, path: str) -> UploadEngine:
        ...


def import_engine_factory(dotted_path: str) -> EngineFactory:
    """Resolve `package.module:attribute` to the engine factory it names."""
    module_name, sep, attribute = dotted_path.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(
            f"Invalid upload_engine: {dotted_path!r}. Expected 'module:factory'"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import upload engine module {module_name!r}: {e}") from e
    try:
        factory = getattr(module, attribute)
    except AttributeError as e:
        raise ValueError(f"Module {module_name!r} has no attribute {attribute!r}") from e
    if not callable(factory):
        raise ValueError(f"Upload engine factory {dotted_path!r} is not callable")
    return factory


def load_upload_engine(settings: Settings, directory: UploadDirectory) -> Optional[UploadEngine]:
    """Build the configured engine, or return None when no engine is configured."""
    if not settings.upload_engine:
        logger.warning(
            "No upload engine configured; requests to %s will be answered with 404",
            settings.upload_path,
        )
        return None

    factory = import_engine_factory(settings.upload_engine)
    engine = factory(
        directory=directory.path,
        naming_function=upload_name_from_headers,
        path=settings.upload_path,
    )
    logger.info(f"Upload engine {settings.upload_engine} serving {settings.upload_path} from {directory.path}")
    return engine
