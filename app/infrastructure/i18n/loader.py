"""Translation loading interface and implementations.

Defines the contract for loading translations and provides a file-based
loader for JSON and YAML translation trees.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple

import yaml

import structlog
from infrastructure.i18n.exceptions import LoadError
from infrastructure.i18n.models import (
    CatalogSet,
    TranslationCatalog,
    freeze_tree,
    normalize_locale,
)

logger = structlog.get_logger()

SUPPORTED_EXTENSIONS = (".json", ".yml", ".yaml")


class TranslationLoader(ABC):
    """Abstract base for translation loaders.

    Implementations must define how to read a complete set of catalogs.
    A load either returns a full CatalogSet or raises; it never returns a
    partially built one.
    """

    @abstractmethod
    def load(self) -> CatalogSet:
        """Load translations for every available locale.

        Returns:
            Unpublished CatalogSet (version 0).

        Raises:
            LoadError: If any source is missing, unreadable or malformed.
        """
        pass


class FileTranslationLoader(TranslationLoader):
    """Loader for JSON and YAML translation files in a directory.

    Accepted layouts, which may be mixed:

    - ``<locale>.json`` / ``<locale>.yml``: the whole tree for the locale
    - ``<namespace>.<locale>.yml``: merged at the top level of the tree
    - ``<locale>/<namespace>.json``: nested under ``<namespace>``

    Files for the same locale are deep-merged in sorted path order.

    Attributes:
        translations_dir: Path to directory containing translation files.
    """

    def __init__(self, translations_dir: Path):
        self.translations_dir = Path(translations_dir)

    def load(self) -> CatalogSet:
        """Read and parse every translation file under translations_dir.

        Returns:
            CatalogSet with one TranslationCatalog per discovered locale.

        Raises:
            LoadError: If the directory is missing, holds no translation
                files, or any single file fails to parse.
        """
        if not self.translations_dir.is_dir():
            raise LoadError(
                f"Translations directory not found: {self.translations_dir}",
                path=str(self.translations_dir),
            )

        sources = self._discover()
        if not sources:
            raise LoadError(
                f"No translation files found in {self.translations_dir}",
                path=str(self.translations_dir),
            )

        trees: Dict[str, Dict[str, Any]] = {}
        files: Dict[str, List[str]] = {}
        for locale, namespace, source_file in sources:
            data = self._read_file(source_file)
            if namespace is not None:
                data = {namespace: data}
            _deep_merge(trees.setdefault(locale, {}), data)
            files.setdefault(locale, []).append(str(source_file))

        catalogs = {
            locale: TranslationCatalog(
                locale=locale,
                messages=freeze_tree(tree),
                sources=tuple(files[locale]),
            )
            for locale, tree in trees.items()
        }

        logger.info(
            "loaded_translations",
            translations_dir=str(self.translations_dir),
            file_count=len(sources),
            locales=sorted(catalogs),
        )

        return CatalogSet(
            catalogs=MappingProxyType(catalogs),
            loaded_at=datetime.now(timezone.utc).isoformat(),
        )

    def _discover(self) -> List[Tuple[str, Optional[str], Path]]:
        """Find translation files and the locale/namespace each belongs to."""
        found = []
        for entry in sorted(self.translations_dir.iterdir()):
            if entry.is_dir():
                locale = normalize_locale(entry.name)
                for source_file in sorted(entry.iterdir()):
                    if _is_translation_file(source_file):
                        found.append((locale, source_file.stem, source_file))
            elif _is_translation_file(entry):
                # "en.json" -> "en", "incident.en-US.yml" -> "en-US"
                locale = normalize_locale(entry.stem.split(".")[-1])
                found.append((locale, None, entry))
            else:
                logger.debug("skipped_non_translation_file", file=str(entry))
        return [item for item in found if item[0]]

    def _read_file(self, source_file: Path) -> Dict[str, Any]:
        """Parse one file into a validated nested dict.

        Raises:
            LoadError: If the file is unreadable, malformed or not a tree.
        """
        try:
            with open(source_file, "r", encoding="utf-8") as f:
                if source_file.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("translation_file_unreadable", file=str(source_file), error=str(e))
            raise LoadError(f"Failed to read {source_file}: {e}", path=str(source_file)) from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error("translation_parse_error", file=str(source_file), error=str(e))
            raise LoadError(f"Failed to parse {source_file}: {e}", path=str(source_file)) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise LoadError(
                f"Translation file root must be a mapping: {source_file}",
                path=str(source_file),
            )
        return _validate_tree(data, source_file, ())


def _is_translation_file(path: Path) -> bool:
    return path.is_file() and path.suffix in SUPPORTED_EXTENSIONS


def _validate_tree(
    data: Dict[Any, Any], source_file: Path, prefix: Tuple[str, ...]
) -> Dict[str, Any]:
    """Coerce leaves to strings and reject values that are not part of a tree.

    Numbers and booleans become strings, nulls are dropped, lists are errors.
    """
    tree: Dict[str, Any] = {}
    for segment, value in data.items():
        segment = str(segment)
        path = prefix + (segment,)
        if isinstance(value, dict):
            tree[segment] = _validate_tree(value, source_file, path)
        elif isinstance(value, str):
            tree[segment] = value
        elif value is None:
            continue
        elif isinstance(value, (int, float, bool)):
            tree[segment] = str(value)
        else:
            raise LoadError(
                f"Unsupported value at {'.'.join(path)} in {source_file}: "
                f"{type(value).__name__}",
                path=str(source_file),
            )
    return tree


def _deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    """Merge source into target. Later entries override earlier ones."""
    for segment, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(segment), dict):
            _deep_merge(target[segment], value)
        elif isinstance(value, dict):
            target[segment] = {}
            _deep_merge(target[segment], value)
        else:
            target[segment] = value
