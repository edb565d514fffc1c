"""Catalog source adapters implementing the CatalogSource port.

Each adapter maps a catalog name such as ``gen_approx_common`` to text:
a file in a directory, a resource inside an installed package, or a string
held in memory.
"""

from importlib import resources
from pathlib import Path
from typing import Dict, Mapping, Union

from phonorules.application.ports import CatalogSource
from phonorules.domain.errors import CatalogNotFoundError
from phonorules.shared.logging import get_logger


class DirectoryCatalogSource(CatalogSource):
    """
    Catalogs stored as files in one directory.

    The catalog ``name`` is read from ``root / (name + suffix)``.
    """

    def __init__(self, root: Union[str, Path], suffix: str = ".txt", encoding: str = "utf-8"):
        """
        Initialize directory source.

        Args:
            root: Directory holding the catalogs
            suffix: File suffix appended to catalog names
            encoding: Text encoding of catalog files
        """
        self.root = Path(root)
        self.suffix = suffix
        self.encoding = encoding
        self._logger = get_logger("infrastructure.catalog_source")

    def path_for(self, name: str) -> Path:
        """Path of the file holding a catalog."""
        return self.root / f"{name}{self.suffix}"

    def open_text(self, name: str) -> str:
        path = self.path_for(name)
        try:
            text = path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            self._logger.error("catalog_source_missing", catalog=name, path=str(path))
            raise CatalogNotFoundError(name, f"no such file {path}")
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error(
                "catalog_source_unreadable", catalog=name, path=str(path), error=str(e)
            )
            raise CatalogNotFoundError(name, str(e))

        self._logger.debug("catalog_source_read", catalog=name, path=str(path), size=len(text))
        return text


class PackageCatalogSource(CatalogSource):
    """Catalogs shipped as resources of an installed Python package."""

    def __init__(self, package: str, suffix: str = ".txt", encoding: str = "utf-8"):
        """
        Initialize package source.

        Args:
            package: Dotted name of the package holding the catalogs
            suffix: File suffix appended to catalog names
            encoding: Text encoding of catalog files
        """
        self.package = package
        self.suffix = suffix
        self.encoding = encoding

    def _resource(self, name: str):
        return resources.files(self.package).joinpath(f"{name}{self.suffix}")

    def open_text(self, name: str) -> str:
        try:
            return self._resource(name).read_text(encoding=self.encoding)
        except (ModuleNotFoundError, OSError, UnicodeDecodeError) as e:
            raise CatalogNotFoundError(name, str(e))


class InMemoryCatalogSource(CatalogSource):
    """Catalogs held as strings, for tests and embedded rule sets."""

    def __init__(self, catalogs: Mapping[str, str]):
        self._catalogs: Dict[str, str] = dict(catalogs)

    def open_text(self, name: str) -> str:
        try:
            return self._catalogs[name]
        except KeyError:
            raise CatalogNotFoundError(name)
