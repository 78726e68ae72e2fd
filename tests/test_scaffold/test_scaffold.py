"""Tests for the react-three-next scaffolding stages and their utilities."""

import json
import sys
from pathlib import Path

import httpx
import pytest

from r3fapp.config import ScaffoldConfig
from r3fapp.errors import CommandError, R3FAppError
from r3fapp.stacks import next as next_stack
from r3fapp.stacks.next import (
    TSCONFIG,
    create_next,
    init_for_typescript,
    inject_next_styled_config,
    remove_tailwind_lint,
    rename_to_typescript,
)
from r3fapp.utils.git import clone_args
from r3fapp.utils.packages import add_args, get_install_cmd, remove_args, upgrade_args
from r3fapp.utils.process import CommandResult, CommandRunner
from r3fapp.utils.update import UpdateStatus, check_for_update, compare_versions


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeRunner:
    """Records commands; ``git clone`` materializes a tiny starter checkout."""

    def __init__(self, fail_on: str | None = None, has_git: bool = True) -> None:
        self.commands: list[list[str]] = []
        self.fail_on = fail_on
        self.has_git = has_git

    def run(self, args, cwd=None, input=None, capture=True):
        self.commands.append(list(args))
        if self.fail_on and self.fail_on in " ".join(args):
            raise CommandError(f"{' '.join(args)} failed", command=args, returncode=1)
        if args[:2] == ["git", "clone"]:
            root = Path(cwd) / args[5]
            (root / ".git").mkdir(parents=True)
            (root / "package.json").write_text(json.dumps({"name": "starter", "scripts": {}}))
            (root / "src").mkdir()
            (root / "src" / "index.js").write_text("export {}\n")
        return CommandResult(args=tuple(args))

    def exists(self, executable: str) -> bool:
        return self.has_git


@pytest.fixture(autouse=True)
def _npm(monkeypatch):
    monkeypatch.delenv("npm_config_user_agent", raising=False)


# ---------------------------------------------------------------------------
# Package managers / git
# ---------------------------------------------------------------------------


class TestPackages:
    def test_npm_by_default(self):
        assert get_install_cmd() == "npm"

    def test_yarn_when_invoked_through_yarn(self, monkeypatch):
        monkeypatch.setenv("npm_config_user_agent", "yarn/1.22.19 npm/? node/v18")
        monkeypatch.setattr("r3fapp.utils.packages.shutil.which", lambda name: "/usr/bin/yarn")
        assert get_install_cmd() == "yarn"

    def test_yarn_agent_without_binary(self, monkeypatch):
        monkeypatch.setenv("npm_config_user_agent", "yarn/1.22.19")
        monkeypatch.setattr("r3fapp.utils.packages.shutil.which", lambda name: None)
        assert get_install_cmd() == "npm"

    def test_add_args(self):
        assert add_args("npm", "a", "b") == ["npm", "install", "a", "b"]
        assert add_args("yarn", "a", dev=True) == ["yarn", "add", "-D", "a"]

    def test_remove_and_upgrade_args(self):
        assert remove_args("npm", "tailwindcss") == ["npm", "uninstall", "tailwindcss"]
        assert remove_args("yarn", "tailwindcss") == ["yarn", "remove", "tailwindcss"]
        assert upgrade_args("yarn", "x@1") == ["yarn", "upgrade", "x@1"]
        assert upgrade_args("npm", "x@1") == ["npm", "install", "x@1"]

    def test_clone_args(self):
        assert clone_args("https://x/r", "my-app", "main") == [
            "git", "clone", "https://x/r", "--branch", "main", "my-app",
            "--single-branch", "--recursive",
        ]
        assert "--recursive" not in clone_args("https://x/r", "my-app", "pmndrs", recursive=False)


class TestCommandRunner:
    def test_captures_stdout(self):
        result = CommandRunner().run([sys.executable, "-c", "print('hi')"])
        assert result.stdout.strip() == "hi"
        assert result.exit_code == 0

    def test_non_zero_exit(self):
        with pytest.raises(CommandError) as exc_info:
            CommandRunner().run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert exc_info.value.returncode == 3

    def test_missing_executable(self):
        with pytest.raises(CommandError, match="Command not found"):
            CommandRunner().run(["r3fapp-no-such-binary"])

    def test_exists(self):
        assert CommandRunner().exists(sys.executable)
        assert not CommandRunner().exists("r3fapp-no-such-binary")


# ---------------------------------------------------------------------------
# Update check
# ---------------------------------------------------------------------------


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestUpdateCheck:
    def test_compare_versions(self):
        assert compare_versions("0.1.0", "0.2.0") is UpdateStatus.OUTDATED
        assert compare_versions("1.0", "1.0.0") is UpdateStatus.CURRENT
        assert compare_versions("2.0.0", "1.9.9") is UpdateStatus.AHEAD
        assert compare_versions("dev", "1.0.0") is UpdateStatus.UNKNOWN

    def test_pre_releases_order_before_final(self):
        assert compare_versions("0.2.0rc1", "0.2.0") is UpdateStatus.OUTDATED
        assert compare_versions("0.2.0", "0.2.0rc1") is UpdateStatus.AHEAD
        assert compare_versions("0.2.0.dev1", "0.2.0a1") is UpdateStatus.OUTDATED

    def test_newer_release(self):
        client = _client(lambda request: httpx.Response(200, json={"info": {"version": "9.0.0"}}))
        status, latest = check_for_update("0.1.0", "https://pypi.test/json", client=client)
        assert status is UpdateStatus.OUTDATED
        assert latest == "9.0.0"

    def test_http_error_is_unknown(self):
        client = _client(lambda request: httpx.Response(500))
        assert check_for_update("0.1.0", "https://pypi.test/json", client=client) == (
            UpdateStatus.UNKNOWN,
            None,
        )

    def test_network_error_is_unknown(self):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        status, _ = check_for_update("0.1.0", "https://pypi.test/json", client=_client(handler))
        assert status is UpdateStatus.UNKNOWN

    def test_bad_payload_is_unknown(self):
        client = _client(lambda request: httpx.Response(200, json={"nope": 1}))
        status, _ = check_for_update("0.1.0", "https://pypi.test/json", client=client)
        assert status is UpdateStatus.UNKNOWN


# ---------------------------------------------------------------------------
# File patching
# ---------------------------------------------------------------------------


class TestStyledConfigPatches:
    def test_remove_tailwind_lint(self, tmp_path: Path):
        (tmp_path / ".eslintrc").write_text(
            json.dumps({"extends": ["next", "plugin:tailwindcss/recommended", "prettier"]})
        )
        remove_tailwind_lint(tmp_path)
        assert json.loads((tmp_path / ".eslintrc").read_text()) == {"extends": ["next", "prettier"]}

    def test_inject_next_styled_config(self, tmp_path: Path):
        (tmp_path / "next.config.js").write_text(
            "const nextConfig = {\n"
            "  // compiler: {\n"
            "  //   styledComponents: true,\n"
            "  // },\n"
            "}\n"
        )
        inject_next_styled_config(tmp_path)
        assert (tmp_path / "next.config.js").read_text() == (
            "const nextConfig = {\n"
            "  compiler: {\n"
            "    styledComponents: true,\n"
            "  },\n"
            "}\n"
        )


class TestTypeScript:
    def test_rename(self, tmp_path: Path):
        (tmp_path / "src" / "dom").mkdir(parents=True)
        (tmp_path / "src" / "index.js").write_text("")
        (tmp_path / "src" / "dom" / "Layout.jsx").write_text("")
        (tmp_path / "src" / "data.json").write_text("{}")
        renamed = rename_to_typescript(tmp_path)
        assert sorted(p.relative_to(tmp_path).as_posix() for p in renamed) == [
            "src/dom/Layout.tsx",
            "src/index.ts",
        ]
        assert (tmp_path / "src" / "data.json").exists()

    def test_init_writes_config(self, tmp_path: Path):
        (tmp_path / "jsconfig.json").write_text("{}")
        (tmp_path / "package.json").write_text(json.dumps({"name": "x", "scripts": {"dev": "next"}}))
        runner = FakeRunner()
        init_for_typescript(tmp_path, "npm", runner)
        assert json.loads((tmp_path / "tsconfig.json").read_text()) == TSCONFIG
        assert "declare module '*.vert'" in (tmp_path / "src" / "index.d.ts").read_text()
        assert not (tmp_path / "jsconfig.json").exists()
        scripts = json.loads((tmp_path / "package.json").read_text())["scripts"]
        assert scripts["dev"] == "next"
        assert scripts["prettier"].startswith("npx prettier --list-different")
        assert runner.commands == [["npm", "install"]]

    def test_failed_install_removes_project(self, tmp_path: Path):
        root = tmp_path / "app"
        root.mkdir()
        (root / "package.json").write_text("{}")
        with pytest.raises(CommandError):
            init_for_typescript(root, "npm", FakeRunner(fail_on="npm install"))
        assert not root.exists()


# ---------------------------------------------------------------------------
# create_next
# ---------------------------------------------------------------------------


class TestCreateNext:
    def test_tailwind_project(self, tmp_path: Path):
        runner = FakeRunner()
        root = create_next("my-app", cwd=tmp_path, runner=runner)
        assert root == tmp_path / "my-app"
        assert not (root / ".git").exists()
        assert runner.commands[0] == [
            "git", "clone", ScaffoldConfig().repo_url, "--branch", "main", "my-app",
            "--single-branch", "--recursive",
        ]
        assert ["npm", "install"] in runner.commands
        assert not any("styled-components" in c for c in runner.commands)
        assert runner.commands[-1][:3] == ["git", "commit", "-m"]

    def test_custom_branch(self, tmp_path: Path):
        runner = FakeRunner()
        create_next("my-app", branch="dev", cwd=tmp_path, runner=runner)
        assert runner.commands[0][4] == "dev"

    def test_pmndrs_style(self, tmp_path: Path, monkeypatch):
        calls = []
        monkeypatch.setattr(
            next_stack,
            "init_for_styled_components",
            lambda root, install_cmd, runner, config: calls.append(root),
        )
        runner = FakeRunner()
        create_next("my-app", style="pmndrs", cwd=tmp_path, runner=runner)
        assert calls == [tmp_path / "my-app"]
        clone = runner.commands[0]
        assert clone[4] == "pmndrs"
        assert "--recursive" not in clone
        assert ["npm", "install", "styled-components", "react-is"] in runner.commands

    def test_typescript(self, tmp_path: Path):
        runner = FakeRunner()
        root = create_next("my-app", typescript=True, cwd=tmp_path, runner=runner)
        assert ["npm", "install", "-D", "typescript", "@types/react", "@types/node"] in runner.commands
        assert (root / "tsconfig.json").exists()
        assert (root / "src" / "index.ts").exists()
        assert not (root / "src" / "index.js").exists()

    def test_styled_runs_styled_init(self, tmp_path: Path, monkeypatch):
        calls = []
        monkeypatch.setattr(
            next_stack,
            "init_for_styled_components",
            lambda root, install_cmd, runner, config: calls.append((root, install_cmd)),
        )
        create_next("my-app", style="styled", cwd=tmp_path, runner=FakeRunner())
        assert calls == [(tmp_path / "my-app", "npm")]

    def test_skips_git_init_without_git(self, tmp_path: Path):
        runner = FakeRunner(has_git=False)
        create_next("my-app", cwd=tmp_path, runner=runner)
        assert not any(c[:2] == ["git", "commit"] for c in runner.commands)

    def test_unknown_style(self, tmp_path: Path):
        with pytest.raises(R3FAppError):
            create_next("my-app", style="sass", cwd=tmp_path, runner=FakeRunner())
