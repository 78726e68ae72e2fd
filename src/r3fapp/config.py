from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MigrationConfig:
    global_sheet: str = "app/global.css"
    tailwind_config: str = "tailwind.config.js"
    source_dirs: tuple[str, ...] = ("src", "app")
    extension: str = ".jsx"
    target_names: tuple[str, ...] = ("Layout", "Instructions")
    class_attribute: str = "className"
    style_suffix: str = ".style"
    name_suffix: str = "Style"
    import_alias: str = "@"  # tsconfig/jsconfig "@/*" -> app/*, src/*
    use_client: bool = True
    base_layer: str = "@tailwind base;"


@dataclass(frozen=True)
class ScaffoldConfig:
    repo_url: str = "https://github.com/pmndrs/react-three-next"
    default_branch: str = "main"
    pmndrs_branch: str = "pmndrs"
    default_style: str = "tailwind"
    pinned_react_types: str = "@types/react@17.0.43"
    pypi_url: str = "https://pypi.org/pypi/create-r3f-app/json"
    update_timeout: float = 5.0
