"""Host adapters: narrow interfaces plus their local implementations."""

from .interfaces import (  # noqa: F401
    ConfigurationStore,
    ExtensionHost,
    FileFilters,
    FileSystem,
    Prompter,
    TaskRunner,
)
from .extensions import EditorCliExtensionHost  # noqa: F401
from .filesystem import LocalFileSystem  # noqa: F401
from .settings_store import WorkspaceSettingsStore  # noqa: F401
from .tasks import MagentoTaskProvider, SubprocessTaskRunner  # noqa: F401

__all__: list[str] = [
    "ConfigurationStore",
    "ExtensionHost",
    "FileFilters",
    "FileSystem",
    "Prompter",
    "TaskRunner",
    "EditorCliExtensionHost",
    "LocalFileSystem",
    "WorkspaceSettingsStore",
    "MagentoTaskProvider",
    "SubprocessTaskRunner",
]
