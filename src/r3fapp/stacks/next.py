"""react-three-next stack: clone the starter and apply the requested options."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from r3fapp.config import MigrationConfig, ScaffoldConfig
from r3fapp.engine.formatter import Formatter, PrettierFormatter
from r3fapp.engine.pipeline import MigrationResult, migrate
from r3fapp.errors import CommandError, R3FAppError
from r3fapp.stylesheet.compiler import TailwindCompiler
from r3fapp.utils import messages
from r3fapp.utils.git import clone_args, init_git
from r3fapp.utils.packages import add_args, get_install_cmd, remove_args, upgrade_args
from r3fapp.utils.process import CommandRunner

logger = logging.getLogger(__name__)

STYLES = ("tailwind", "styled", "pmndrs")

SHADER_DECLARATIONS = """declare module '*.vert' {
    const content: string
    export default content
}

declare module '*.frag' {
    const content: string
    export default content
}
"""

TSCONFIG = {
    "compilerOptions": {
        "baseUrl": ".",
        "paths": {"@/*": ["app/*", "src/*"]},
        "target": "es5",
        "lib": ["dom", "dom.iterable", "esnext"],
        "allowJs": True,
        "skipLibCheck": True,
        "strict": False,
        "forceConsistentCasingInFileNames": True,
        "noEmit": True,
        "incremental": True,
        "esModuleInterop": True,
        "module": "esnext",
        "moduleResolution": "node",
        "isolatedModules": True,
        "jsx": "react-jsx",
    },
    "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx"],
    "exclude": ["node_modules"],
}

PRETTIER_SCRIPT = (
    'npx prettier --list-different "./src/**/*.{ts,tsx,md}" "./app/**/*.{ts,tsx,md}"'
)


def _write_json(path: Path, data: object) -> None:
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


# ---------------------------------------------------------------------------
# Clone / install
# ---------------------------------------------------------------------------


def clone(
    project_name: str,
    style: str,
    branch: str | None,
    cwd: Path,
    runner: CommandRunner,
    config: ScaffoldConfig,
) -> Path:
    """Clone the starter into ``cwd/project_name`` and drop its git history."""
    if style == "pmndrs":
        args = clone_args(config.repo_url, project_name, config.pmndrs_branch, recursive=False)
    else:
        args = clone_args(config.repo_url, project_name, branch or config.default_branch)
    runner.run(args, cwd=cwd, capture=False)
    root = cwd / project_name
    shutil.rmtree(root / ".git", ignore_errors=True)
    messages.success(f"Folder and files created for {messages.cmd(project_name)}")
    return root


def install(
    root: Path, install_cmd: str, typescript: bool, styled: bool, runner: CommandRunner
) -> None:
    messages.info("Installing packages...")
    runner.run([install_cmd, "install"], cwd=root)
    messages.success(f"Installed dependencies for {messages.cmd(root.name)}")

    if styled:
        messages.info("Installing packages for styled-components...")
        runner.run(add_args(install_cmd, "styled-components", "react-is"), cwd=root)
        runner.run(add_args(install_cmd, "babel-plugin-styled-components", dev=True), cwd=root)
        if typescript:
            runner.run(add_args(install_cmd, "@types/styled-components", dev=True), cwd=root)
        messages.success("Installed dependencies for styled-components")

    if typescript:
        messages.info("Installing packages for TypeScript...")
        runner.run(
            add_args(install_cmd, "typescript", "@types/react", "@types/node", dev=True),
            cwd=root,
        )
        messages.success("Installed dependencies for TypeScript")


# ---------------------------------------------------------------------------
# styled-components
# ---------------------------------------------------------------------------


def remove_tailwind_lint(root: Path) -> None:
    """Drop the tailwind plugin from ``.eslintrc``'s ``extends``."""
    path = root / ".eslintrc"
    eslintrc = json.loads(path.read_text(encoding="utf-8"))
    extends = [e for e in eslintrc.get("extends", []) if e != "plugin:tailwindcss/recommended"]
    _write_json(path, {"extends": extends})


def inject_next_styled_config(root: Path) -> None:
    """Uncomment the ``compiler.styledComponents`` block in ``next.config.js``."""
    path = root / "next.config.js"
    content = path.read_text(encoding="utf-8")
    content = content.replace("// compiler: {", "compiler: {")
    content = content.replace("//   styledComponents: true,", "  styledComponents: true,")
    content = content.replace("// },", "},")
    path.write_text(content, encoding="utf-8")


def init_for_styled_components(
    root: Path,
    install_cmd: str,
    runner: CommandRunner,
    config: ScaffoldConfig,
    migration: MigrationConfig | None = None,
    formatter: Formatter | None = None,
) -> MigrationResult:
    messages.info("Initializing for styled-components...")
    migration = migration or MigrationConfig()

    remove_tailwind_lint(root)
    inject_next_styled_config(root)

    result = migrate(
        root,
        migration,
        compiler=TailwindCompiler(migration.tailwind_config, runner=runner),
        formatter=formatter or PrettierFormatter(root, runner=runner),
    )
    runner.run(remove_args(install_cmd, "tailwindcss"), cwd=root)
    for name in ("postcss.config.js", migration.tailwind_config):
        (root / name).unlink(missing_ok=True)

    # styled-components typings break with newer @types/react
    # (DefinitelyTyped/DefinitelyTyped#59765).
    messages.info(f"Pinning {config.pinned_react_types} for styled-components")
    runner.run(upgrade_args(install_cmd, config.pinned_react_types), cwd=root)

    messages.success("Succeed to initialize for styled-components")
    return result


# ---------------------------------------------------------------------------
# TypeScript
# ---------------------------------------------------------------------------


def init_for_typescript(root: Path, install_cmd: str, runner: CommandRunner) -> None:
    messages.info("Initializing for TypeScript...")

    (root / "src").mkdir(exist_ok=True)
    (root / "src" / "index.d.ts").write_text(SHADER_DECLARATIONS, encoding="utf-8")
    _write_json(root / "tsconfig.json", TSCONFIG)
    (root / "jsconfig.json").unlink(missing_ok=True)
    (root / "jsconfig.server.json").unlink(missing_ok=True)

    package_path = root / "package.json"
    package = json.loads(package_path.read_text(encoding="utf-8"))
    package.setdefault("scripts", {})["prettier"] = PRETTIER_SCRIPT
    _write_json(package_path, package)

    try:
        runner.run([install_cmd, "install"], cwd=root)
    except CommandError:
        logger.error("TypeScript install failed, removing %s", root)
        shutil.rmtree(root, ignore_errors=True)
        raise
    messages.success("Succeed to initialize for TypeScript")


def rename_to_typescript(root: Path, source_dirs: tuple[str, ...] = ("src", "app")) -> list[Path]:
    """Rename ``.js`` to ``.ts`` and ``.jsx`` to ``.tsx`` below *source_dirs*."""
    renamed: list[Path] = []
    for source_dir in source_dirs:
        base = root / source_dir
        if not base.is_dir():
            continue
        for path in sorted(base.rglob("*")):
            if not path.is_file() or path.suffix not in (".js", ".jsx"):
                continue
            target = path.with_suffix(".ts" if path.suffix == ".js" else ".tsx")
            path.rename(target)
            renamed.append(target)
    return renamed


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def create_next(
    project_name: str,
    style: str = "tailwind",
    typescript: bool = False,
    branch: str | None = None,
    cwd: Path | None = None,
    runner: CommandRunner | None = None,
    config: ScaffoldConfig | None = None,
) -> Path:
    """Create a react-three-next project and return its root."""
    if style not in STYLES:
        raise R3FAppError(f"Unknown style {style!r}; expected one of {', '.join(STYLES)}")
    config = config or ScaffoldConfig()
    runner = runner or CommandRunner()
    cwd = Path(cwd) if cwd is not None else Path.cwd()

    messages.info(f"Creating {project_name} using r3f-next-starter...")
    root = clone(project_name, style, branch, cwd, runner, config)

    install_cmd = get_install_cmd()
    styled = style != config.default_style
    install(root, install_cmd, typescript, styled, runner)

    if styled:
        init_for_styled_components(root, install_cmd, runner, config)

    if typescript:
        init_for_typescript(root, install_cmd, runner)
        rename_to_typescript(root)

    init_git(root, runner, "Initial commit from create-r3f-app (Next)")
    messages.start(project_name, "next")
    return root
