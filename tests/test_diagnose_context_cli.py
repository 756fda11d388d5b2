import io
import json

import pytest

from wpcontext import diagnose_context
from wpcontext.errors import InvalidContextError


def run_main(monkeypatch, capsys, *argv, stdin=None):
    monkeypatch.setattr(diagnose_context.sys, "argv", ["wp-context", *argv])
    if stdin is not None:
        monkeypatch.setattr(diagnose_context.sys, "stdin", io.StringIO(stdin))
    diagnose_context.main()
    return capsys.readouterr()


@pytest.fixture
def facts_file(tmp_path):
    def _write(facts):
        path = tmp_path / "facts.json"
        path.write_text(json.dumps(facts))
        return str(path)

    return _write


class TestDiagnose:
    def test_determines_from_facts(self):
        context = diagnose_context.diagnose({"core_loaded": True, "admin": True})

        assert context.is_backoffice()
        assert context.pending_hooks

    def test_fires_hooks_in_order(self):
        context = diagnose_context.diagnose(
            {"core_loaded": True}, fire=["rest_api_init", "login_init"]
        )

        assert context.is_rest()
        assert not context.is_login()

    def test_current_screen_uses_admin_flag(self):
        front = diagnose_context.diagnose(
            {"core_loaded": True}, fire=["current_screen"], admin_screen=False
        )
        back = diagnose_context.diagnose({"core_loaded": True}, fire=["current_screen"])

        assert front.is_frontoffice()
        assert back.is_backoffice()

    def test_force_and_with_cli(self):
        context = diagnose_context.diagnose({}, force="cron", with_cli=True)

        assert context.to_dict()["cron"] is True
        assert context.is_core()
        assert context.is_wp_cli()

    def test_invalid_force(self):
        with pytest.raises(InvalidContextError):
            diagnose_context.diagnose({}, force="nope")


class TestMain:
    def test_prints_json(self, monkeypatch, capsys, facts_file):
        path = facts_file({"core_loaded": True, "cron": True})

        captured = run_main(monkeypatch, capsys, path)

        output = json.loads(captured.out)
        assert output["core"] is True
        assert output["cron"] is True
        assert output["frontoffice"] is False
        assert len(output) == 11

    def test_reads_stdin(self, monkeypatch, capsys):
        captured = run_main(monkeypatch, capsys, stdin=json.dumps({"core_loaded": True}))

        assert json.loads(captured.out)["frontoffice"] is True

    def test_empty_stdin_falls_back_to_config_dir(self, monkeypatch, capsys, tmp_path):
        (tmp_path / "environment.json").write_text(json.dumps({"core_loaded": True, "cron": True}))
        monkeypatch.setenv("WPCONTEXT_CONFIG_DIR", str(tmp_path))

        captured = run_main(monkeypatch, capsys, stdin="")

        output = json.loads(captured.out)
        assert output["cron"] is True
        assert output["frontoffice"] is False

    def test_blank_stdin_falls_back_to_config_dir(self, monkeypatch, capsys, tmp_path):
        (tmp_path / "environment.json").write_text(json.dumps({"core_loaded": True, "admin": True}))
        monkeypatch.setenv("WPCONTEXT_CONFIG_DIR", str(tmp_path))

        captured = run_main(monkeypatch, capsys, stdin="  \n")

        assert json.loads(captured.out)["backoffice"] is True

    def test_set_overrides(self, monkeypatch, capsys, facts_file):
        path = facts_file({"core_loaded": True})

        captured = run_main(monkeypatch, capsys, path, "--set", "ajax=true")

        assert json.loads(captured.out)["ajax"] is True

    def test_fire_and_force(self, monkeypatch, capsys, facts_file):
        path = facts_file({"core_loaded": True, "cli": True})

        captured = run_main(monkeypatch, capsys, path, "--fire", "login_init")
        output = json.loads(captured.out)
        assert output["login"] is True
        assert output["wpcli"] is True

        captured = run_main(monkeypatch, capsys, path, "--force", "installing")
        output = json.loads(captured.out)
        assert output["installing"] is True
        assert output["core"] is False

    def test_invalid_force_exits(self, monkeypatch, capsys, facts_file):
        path = facts_file({"core_loaded": True})

        with pytest.raises(SystemExit) as exc:
            run_main(monkeypatch, capsys, path, "--force", "admin")

        assert exc.value.code == 2
        err = capsys.readouterr().err
        assert "Error: Invalid context." in err
        assert "'admin' is not a valid context." in err

    def test_invalid_set_exits(self, monkeypatch, capsys, facts_file):
        path = facts_file({})

        with pytest.raises(SystemExit) as exc:
            run_main(monkeypatch, capsys, path, "--set", "admin")

        assert exc.value.code == 2
        assert "Invalid --set value" in capsys.readouterr().err

    def test_strict_unknown_fact_exits(self, monkeypatch, capsys, facts_file):
        path = facts_file({"is_admin": True})

        with pytest.raises(SystemExit) as exc:
            run_main(monkeypatch, capsys, path, "--strict")

        assert exc.value.code == 2
        assert "Unknown environment fact" in capsys.readouterr().err

    def test_missing_file_strict_exits(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc:
            run_main(monkeypatch, capsys, str(tmp_path / "missing.json"), "--strict")

        assert exc.value.code == 2
        assert "Could not load environment facts" in capsys.readouterr().err

    def test_non_object_stdin_exits(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            run_main(monkeypatch, capsys, stdin="[1]")

        assert exc.value.code == 2
        assert "Expected a JSON object" in capsys.readouterr().err

    def test_tui_output(self, monkeypatch, capsys, facts_file):
        monkeypatch.setenv("COLUMNS", "120")
        path = facts_file({"core_loaded": True, "admin": True})

        captured = run_main(monkeypatch, capsys, path, "--tui")

        assert "WordPress Request Context" in captured.out
        assert "backoffice" in captured.out
        assert "Pending late corrections" in captured.out
