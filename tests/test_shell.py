"""Tests for shell/privilege.py and shell/actions.py."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from stackup.shell.actions import run_mutating
from stackup.shell.privilege import in_group, sudo, target_user


class TestPrivilege:
    def test_sudo_prefix_for_regular_user(self):
        with patch("stackup.shell.privilege.is_root", return_value=False):
            assert sudo() == ["sudo"]

    def test_no_prefix_for_root(self):
        with patch("stackup.shell.privilege.is_root", return_value=True):
            assert sudo() == []

    def test_target_user_prefers_sudo_caller(self, monkeypatch):
        monkeypatch.setenv("SUDO_USER", "alice")
        monkeypatch.setenv("USER", "root")
        assert target_user() == "alice"

    def test_target_user_falls_back_to_user(self, monkeypatch):
        monkeypatch.delenv("SUDO_USER", raising=False)
        monkeypatch.setenv("USER", "bob")
        assert target_user() == "bob"

    def test_in_group_quotes_command(self):
        assert in_group("docker", ["docker", "compose", "-p", "my app", "up"]) == [
            "sg",
            "docker",
            "-c",
            "docker compose -p 'my app' up",
        ]


class TestRunMutating:
    async def test_dry_run_prints_and_skips(self, make_config, capsys):
        with patch("stackup.shell.actions.run_interactive", new_callable=AsyncMock) as mock_exec:
            code = await run_mutating(["sudo", "apt-get", "update"], make_config(dry_run=True))

        assert code == 0
        mock_exec.assert_not_awaited()
        assert capsys.readouterr().out == "DRY-RUN: sudo apt-get update\n"

    async def test_dry_run_display_and_cwd(self, make_config, tmp_path, capsys):
        await run_mutating(
            ["sudo", "tee", "/etc/x"],
            make_config(dry_run=True),
            cwd=tmp_path,
            display="echo 'line' | sudo tee /etc/x",
        )
        assert capsys.readouterr().out == (
            f"DRY-RUN: (cd {tmp_path} && echo 'line' | sudo tee /etc/x)\n"
        )

    async def test_executes_with_input(self, make_config):
        with patch(
            "stackup.shell.actions.run_interactive", new_callable=AsyncMock, return_value=0
        ) as mock_exec:
            code = await run_mutating(["sudo", "tee", "/etc/x"], make_config(), input_data=b"x")

        assert code == 0
        mock_exec.assert_awaited_once_with(["sudo", "tee", "/etc/x"], cwd=None, input_data=b"x")

    async def test_nonzero_exit_returned(self, make_config):
        with patch(
            "stackup.shell.actions.run_interactive", new_callable=AsyncMock, return_value=100
        ):
            assert await run_mutating(["apt-get", "update"], make_config()) == 100
