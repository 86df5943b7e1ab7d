"""
Configuration Loader

Builds a Configuration from a YAML project file. Keys mirror the Configuration
attributes:

    document_class: {book: [11pt, a4paper, twoside]}
    packages:
      - hyperref: [bookmarks=true, colorlinks=false]
      - fontenc: [T1]
      - booktabs
    title: "Draft: Social Navigation"
    author: {name: Jane Doe, email: jane@example.org}
    scm: mercurial                # mercurial | subversion | auto | null
    preamble_extras: \\include{commands}
    table_of_contents: true
    main_content: [content.analysis]
    appendices: [content.inventory, content.mapping]
    bibliography: {bibliography: kluwer}
    source_directory: src         # relative to the project file
    build_directory: build        # null builds in the source directory

Examples:
    # Load a project file
    >>> config = load_configuration(Path("rakedlatex.yaml"))

    # Override single values with OmegaConf dotlist syntax
    >>> config = load_configuration(Path("rakedlatex.yaml"), ["title=Final", "list_of_tables=true"])
"""

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from rakedlatex.contexts.scm.scm_stats import ScmRecord, collect_scm_stats
from rakedlatex.contexts.templating.document_config import Author, Configuration
from rakedlatex.contexts.templating.exceptions import InvalidConfigurationError
from rakedlatex.contexts.templating.logger import _log_debug

CONFIG_KEYS = [f.name for f in fields(Configuration)]

BOOLEAN_KEYS = ["table_of_contents", "list_of_figures", "list_of_tables"]
TEXT_KEYS = ["title", "preamble_extras", "abstract", "acknowledgments", "base_latex_file"]


def load_configuration(
    config_path: Path,
    overrides: Optional[List[str]] = None,
    collect_scm: bool = True,
) -> Configuration:
    """
    Load a Configuration from a YAML project file.

    Args:
        config_path: Path to the project file
        overrides: OmegaConf dotlist overrides (e.g., ["title=Final"]), applied
                   after the file is loaded
        collect_scm: Query the SCM client named by the `scm` key. When False a
                     client name yields no SCM stats at all

    Returns:
        Configuration populated from the file

    Raises:
        FileNotFoundError: If the project file doesn't exist
        InvalidConfigurationError: If the file doesn't match the schema
                                   or cannot be parsed
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Project file not found: {config_path}")

    try:
        settings = OmegaConf.load(config_path)
        if overrides:
            settings = OmegaConf.merge(settings, OmegaConf.from_dotlist(list(overrides)))
        # LaTeX math such as ${}^{14}$C must stay literal, so no interpolation
        data = OmegaConf.to_container(settings, resolve=False)
    except OmegaConfBaseException as e:
        raise InvalidConfigurationError(f"Could not read project file {config_path}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(
            f"Project file must contain a mapping at root level: {config_path}"
        )

    _log_debug(f"Loaded project file {config_path} (overrides: {overrides or []})")
    return configuration_from_dict(
        data, base_dir=config_path.resolve().parent, collect_scm=collect_scm
    )


def configuration_from_dict(
    data: Dict[str, Any],
    base_dir: Path,
    collect_scm: bool = True,
) -> Configuration:
    """
    Build a Configuration from plain data (as loaded from YAML).

    Args:
        data: Mapping of configuration keys to values
        base_dir: Directory that relative source/build directories resolve against.
                  Also the default for both directories
        collect_scm: See load_configuration()

    Returns:
        Configuration populated from data

    Raises:
        InvalidConfigurationError: On unknown keys or malformed values
    """
    unknown = [key for key in data if key not in CONFIG_KEYS]
    if unknown:
        raise InvalidConfigurationError(
            f"Unknown configuration keys: {unknown}. Valid keys: {CONFIG_KEYS}"
        )

    config = Configuration(source_directory=base_dir, build_directory=base_dir)

    if data.get("document_class") is not None:
        config.document_class = _parse_document_class(data["document_class"])
    if data.get("packages") is not None:
        config.packages = _parse_packages(data["packages"])
    if data.get("author") is not None:
        config.author = _parse_author(data["author"])

    for key in TEXT_KEYS:
        if data.get(key) is not None:
            setattr(config, key, str(data[key]))

    for key in BOOLEAN_KEYS:
        if data.get(key) is not None:
            if not isinstance(data[key], bool):
                raise InvalidConfigurationError(f"'{key}' must be true or false, got {data[key]!r}")
            setattr(config, key, data[key])

    for key in ["main_content", "appendices"]:
        if data.get(key) is not None:
            setattr(config, key, _as_string_list(data[key], key))

    if data.get("bibliography") is not None:
        bibliography = data["bibliography"]
        if not isinstance(bibliography, dict):
            raise InvalidConfigurationError(
                f"'bibliography' must map bib files to styles, got {bibliography!r}"
            )
        config.bibliography = {str(name): str(style) for name, style in bibliography.items()}

    if data.get("source_directory") is not None:
        config.source_directory = _resolve_directory(data["source_directory"], base_dir)
    if "build_directory" in data:
        build_directory = data["build_directory"]
        config.build_directory = (
            None if build_directory is None else _resolve_directory(build_directory, base_dir)
        )

    # Queried last so the checkout is the configured source directory
    config.scm = _parse_scm(data.get("scm"), config.source_directory, collect_scm)

    return config


def _as_string_list(value: Any, key: str) -> List[str]:
    """Coerce a scalar or list of scalars to a list of strings."""
    if value is None:
        return []
    if isinstance(value, (str, int, float)):
        return [str(value)]
    if isinstance(value, list) and all(not isinstance(v, (dict, list)) for v in value):
        return [str(v) for v in value]
    raise InvalidConfigurationError(f"'{key}' must be a list of names, got {value!r}")


def _parse_document_class(value: Any) -> Dict[str, List[str]]:
    if isinstance(value, str):
        return {value: []}
    if isinstance(value, dict) and value:
        return {
            str(name): _as_string_list(options, f"document_class.{name}")
            for name, options in value.items()
        }
    raise InvalidConfigurationError(
        f"'document_class' must be a class name or a mapping of class to options, got {value!r}"
    )


def _parse_packages(value: Any) -> List[Tuple[str, List[str]]]:
    """
    Parse the package list.

    Each entry is either a bare package name or a single-key mapping from
    package name to its options.
    """
    if not isinstance(value, list):
        raise InvalidConfigurationError(f"'packages' must be a list, got {value!r}")

    packages = []
    for entry in value:
        if isinstance(entry, str):
            packages.append((entry, []))
        elif isinstance(entry, dict) and len(entry) == 1:
            name, options = next(iter(entry.items()))
            packages.append((str(name), _as_string_list(options, f"packages.{name}")))
        else:
            raise InvalidConfigurationError(
                f"Package entries must be a name or a single-key mapping, got {entry!r}"
            )
    return packages


def _parse_author(value: Any) -> Author:
    if isinstance(value, str):
        return Author(name=value)
    if isinstance(value, dict) and value.get("name"):
        extra = [key for key in value if key not in ("name", "email")]
        if extra:
            raise InvalidConfigurationError(f"Unknown author keys: {extra}")
        email = value.get("email")
        return Author(name=str(value["name"]), email=str(email) if email else None)
    raise InvalidConfigurationError(f"'author' must be a name or have a 'name' key, got {value!r}")


def _parse_scm(value: Any, working_dir: Path, collect_scm: bool) -> Optional[ScmRecord]:
    """
    Resolve the `scm` key.

    A client name ("mercurial", "subversion", "auto") is queried now; a mapping
    is taken as literal stats.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not collect_scm:
            return None
        try:
            return collect_scm_stats(value, working_dir=working_dir)
        except ValueError as e:
            raise InvalidConfigurationError(str(e)) from e
    if isinstance(value, dict):
        extra = [key for key in value if key not in ("name", "revision", "date")]
        if extra:
            raise InvalidConfigurationError(f"Unknown scm keys: {extra}")
        return ScmRecord(
            **{key: None if v is None else str(v) for key, v in value.items()}
        )
    raise InvalidConfigurationError(
        f"'scm' must be a client name or a mapping of stats, got {value!r}"
    )


def _resolve_directory(value: Any, base_dir: Path) -> Path:
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path
