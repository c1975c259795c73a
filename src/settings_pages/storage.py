"""Storage backends for settings persistence.

Settings are kept as one flat ``{field_id: value}`` blob per page, stored
under a namespaced key in a key-value backend. This module provides the
backend protocol, three backends (in-memory, YAML file, SQL table) and the
``SettingsStore`` that maps page ids to backend keys.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml
from sqlalchemy import JSON, String, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "settings_"


class KeyValueBackend(Protocol):
    """Minimal key-value contract used by ``SettingsStore``.

    ``set`` and ``delete`` report success as a bool instead of raising, so
    callers can surface persistence failures without catching
    backend-specific exceptions.
    """

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> bool:
        ...

    def delete(self, key: str) -> bool:
        ...

    def exists(self, key: str) -> bool:
        ...


class MemoryBackend:
    """Process-local dict backend, mainly for tests and demos."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = copy.deepcopy(value)
        return True

    def delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def exists(self, key: str) -> bool:
        return key in self._data


class YamlBackend:
    """YAML file backend.

    The whole file is one mapping of key -> value. Writes go through a
    temporary file and ``replace`` so a crash never leaves a partial file.

    Example file structure:
        settings_example-settings:
          site_name: My site
          enable_features: true
    """

    def __init__(self, path: Path):
        """Initialize YAML storage.

        Args:
            path: Path to the YAML file.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Get the storage file path."""
        return self._path

    def load(self) -> Dict[str, Any]:
        """Load all entries from the YAML file.

        Returns:
            Mapping of key -> value; empty if the file is missing or invalid.
        """
        if not self._path.exists():
            return {}

        try:
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load settings from {self._path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring non-mapping settings file {self._path}")
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self.load().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        data = self.load()
        data[key] = value
        return self._write(data)

    def delete(self, key: str) -> bool:
        data = self.load()
        if key not in data:
            return False
        del data[key]
        return self._write(data)

    def exists(self, key: str) -> bool:
        return key in self.load()

    def _write(self, data: Dict[str, Any]) -> bool:
        temp_path = self._path.with_suffix(f"{self._path.suffix}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            temp_path.replace(self._path)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to write settings to {self._path}: {e}")
            if temp_path.exists():
                temp_path.unlink()
            return False
        return True


class Base(DeclarativeBase):
    """Base class for storage models."""
    pass


class Option(Base):
    """One key-value entry."""

    __tablename__ = "options"

    key: Mapped[str] = mapped_column(String(191), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON)


class SqlBackend:
    """SQL table backend using SQLAlchemy.

    Each key is one row of the ``options`` table with a JSON value column.
    The table is created on construction if it does not exist.
    """

    def __init__(self, database_url: str, echo: bool = False):
        """Initialize SQL storage.

        Args:
            database_url: SQLAlchemy URL, e.g. "sqlite:///settings.db".
            echo: Log emitted SQL statements.
        """
        self._engine = create_engine(database_url, echo=echo)
        Base.metadata.create_all(self._engine)

    def get(self, key: str, default: Any = None) -> Any:
        with Session(self._engine) as session:
            row = session.get(Option, key)
            return copy.deepcopy(row.value) if row is not None else default

    def set(self, key: str, value: Any) -> bool:
        try:
            with Session(self._engine) as session, session.begin():
                session.merge(Option(key=key, value=value))
        except SQLAlchemyError:
            logger.exception(f"Failed to store option '{key}'")
            return False
        return True

    def delete(self, key: str) -> bool:
        try:
            with Session(self._engine) as session, session.begin():
                row = session.get(Option, key)
                if row is None:
                    return False
                session.delete(row)
        except SQLAlchemyError:
            logger.exception(f"Failed to delete option '{key}'")
            return False
        return True

    def exists(self, key: str) -> bool:
        with Session(self._engine) as session:
            return session.get(Option, key) is not None

    def dispose(self) -> None:
        """Close pooled connections."""
        self._engine.dispose()


class SettingsStore:
    """Per-page settings blobs on top of a key-value backend.

    A page's blob lives under ``prefix + page_id``. Saving replaces the
    whole blob; there is no merge at this layer.
    """

    def __init__(self, backend: KeyValueBackend, prefix: str = DEFAULT_PREFIX):
        self._backend = backend
        self._prefix = prefix

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    def key_for(self, page_id: str) -> str:
        """Backend key holding a page's settings."""
        return f"{self._prefix}{page_id}"

    def load(self, page_id: str) -> Dict[str, Any]:
        """Load a page's blob; missing or malformed blobs read as empty."""
        data = self._backend.get(self.key_for(page_id), None)
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed settings blob for page '{page_id}'")
            return {}
        return dict(data)

    def save(self, page_id: str, values: Dict[str, Any]) -> bool:
        return self._backend.set(self.key_for(page_id), dict(values))

    def delete(self, page_id: str) -> bool:
        return self._backend.delete(self.key_for(page_id))

    def exists(self, page_id: str) -> bool:
        return self._backend.exists(self.key_for(page_id))
