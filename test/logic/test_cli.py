from unittest.mock import patch

import click.testing
import pytest
import simplejson as json

from grabberconf.cli import cli
from grabberconf.device import EGrabberImportError, MockGrabber
from grabberconf.profiles import LINE_TRIGGER_STROBE, load_profile, render_script
from grabberconf.types import ProfileValidationError


@pytest.fixture
def cli_runner():
    return click.testing.CliRunner()


@pytest.fixture
def script_file(tmp_path):
    path = tmp_path / "egrabberConfig.js"
    path.write_text(render_script(LINE_TRIGGER_STROBE), encoding="utf-8")
    return path


@pytest.fixture
def no_stop_script(tmp_path):
    path = tmp_path / "no_stop.js"
    path.write_text('var g = grabbers[0];\ng.RemotePort.set("Width", 1);\n')
    return path


def test_tree(cli_runner):
    result = cli_runner.invoke(cli, ["--tree"])
    assert result.exit_code == 0
    for name in ("apply", "discover", "profile", "import", "export"):
        assert f"└── {name}" in result.output


def test_discover(cli_runner):
    cameras = [{"index": 0, "vendor": "Vendor", "model": "Fake-Cam", "serial": "42"}]
    with patch("grabberconf.cli.base.list_cameras", return_value=cameras):
        result = cli_runner.invoke(cli, ["discover"])
    assert result.exit_code == 0, result.output
    assert "Fake-Cam" in result.output


def test_discover_none(cli_runner):
    with patch("grabberconf.cli.base.list_cameras", return_value=[]):
        result = cli_runner.invoke(cli, ["discover"])
    assert result.exit_code == 0
    assert "No cameras detected" in result.output


def test_discover_without_binding(cli_runner):
    with patch(
        "grabberconf.cli.base.list_cameras",
        side_effect=EGrabberImportError("Failed to import the eGrabber binding"),
    ):
        result = cli_runner.invoke(cli, ["discover"])
    assert result.exit_code == 1
    assert "Failed to import" in result.output


@pytest.mark.usefixtures("tmp_home")
class TestApplyCLI:
    def test_mock(self, cli_runner):
        result = cli_runner.invoke(cli, ["apply", "--mock"])
        assert result.exit_code == 0, result.output
        assert "Applied profile 'line_trigger_strobe': 21 operations" in result.output

    def test_named_profile(self, cli_runner):
        result = cli_runner.invoke(cli, ["apply", "full_hd_25fps", "--mock"])
        assert result.exit_code == 0, result.output
        assert "'full_hd_25fps': 11 operations" in result.output

    def test_dry_run(self, cli_runner):
        result = cli_runner.invoke(cli, ["apply", "--dry-run"])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "[01] RemotePort.execute('AcquisitionStop')"
        assert lines[20] == "[21] RemotePort.execute('AcquisitionStart')"

    def test_script(self, cli_runner, script_file):
        result = cli_runner.invoke(
            cli, ["apply", "--mock", "--script", str(script_file)]
        )
        assert result.exit_code == 0, result.output
        assert "'egrabberConfig': 21 operations" in result.output

    def test_unknown_profile(self, cli_runner):
        result = cli_runner.invoke(cli, ["apply", "nope", "--mock"])
        assert result.exit_code != 0
        assert "Profile 'nope' not found" in result.output

    def test_dry_run_invalid_script(self, cli_runner, no_stop_script):
        result = cli_runner.invoke(
            cli, ["apply", "--dry-run", "--script", str(no_stop_script)]
        )
        assert result.exit_code == 1
        assert not isinstance(result.exception, ProfileValidationError)
        assert "must start with RemotePort.execute('AcquisitionStop')" in (
            result.output
        )

    def test_invalid_script_never_opens_camera(self, cli_runner, no_stop_script):
        with patch("grabberconf.cli.base.EGrabberDevice") as device_cls:
            result = cli_runner.invoke(cli, ["apply", "--script", str(no_stop_script)])

        assert result.exit_code == 1
        assert "must start with" in result.output
        device_cls.assert_not_called()

    def test_camera_index(self, cli_runner):
        mock = MockGrabber()
        with patch(
            "grabberconf.cli.base.EGrabberDevice", return_value=mock
        ) as device_cls:
            result = cli_runner.invoke(cli, ["apply", "--index", "2"])

        assert result.exit_code == 0, result.output
        device_cls.assert_called_once_with(camera_index=2)
        assert len(mock.calls) == 21
        assert not mock.is_connected()

    def test_device_rejects(self, cli_runner):
        mock = MockGrabber(reject={"StrobeDelay": "out of range"})
        with patch("grabberconf.cli.base.EGrabberDevice", return_value=mock):
            result = cli_runner.invoke(cli, ["apply"])

        assert result.exit_code == 1
        assert "failed at step 17" in result.output
        assert not mock.is_connected()

    def test_no_binding(self, cli_runner):
        with patch(
            "grabberconf.device.egrabber.get_egrabber",
            side_effect=EGrabberImportError("egrabber binding missing"),
        ):
            result = cli_runner.invoke(cli, ["apply"])

        assert result.exit_code == 1
        assert "Error connecting to camera" in result.output

    def test_log_file(self, cli_runner, tmp_path):
        log_path = tmp_path / "apply.log"
        result = cli_runner.invoke(
            cli, ["apply", "--mock", "--log-path", str(log_path), "-ll", "debug"]
        )
        assert result.exit_code == 0, result.output
        text = log_path.read_text()
        assert "Applying profile 'line_trigger_strobe'" in text
        assert "RemotePort.set('Width', 512)" in text


@pytest.mark.usefixtures("tmp_home")
class TestProfileCLI:
    def test_list(self, cli_runner):
        result = cli_runner.invoke(cli, ["profile", "list"])
        assert result.exit_code == 0, result.output
        assert "line_trigger_strobe" in result.output
        assert "full_hd_25fps" in result.output

    def test_show(self, cli_runner):
        result = cli_runner.invoke(cli, ["profile", "show", "line_trigger_strobe"])
        assert result.exit_code == 0, result.output
        assert "TTLIO12" in result.output
        assert "Device0Strobe" in result.output
        assert "WARNING" not in result.output

    def test_show_json(self, cli_runner):
        result = cli_runner.invoke(cli, ["profile", "show", "full_hd_25fps", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["name"] == "full_hd_25fps"
        assert data["operations"][-2] == {
            "port": "RemotePort",
            "action": "set",
            "key": "Height",
            "value": 1080,
        }

    def test_show_missing(self, cli_runner):
        result = cli_runner.invoke(cli, ["profile", "show", "nope"])
        assert result.exit_code == 1

    def test_init(self, cli_runner, tmp_home):
        result = cli_runner.invoke(cli, ["profile", "init"])
        assert result.exit_code == 0, result.output
        assert (tmp_home / ".grabberconf" / "profiles.ini").exists()

    def test_copy(self, cli_runner):
        result = cli_runner.invoke(
            cli, ["profile", "copy", "line_trigger_strobe", "mine"]
        )
        assert result.exit_code == 0, result.output
        assert load_profile("mine").operations == LINE_TRIGGER_STROBE.operations

        result = cli_runner.invoke(
            cli, ["profile", "copy", "line_trigger_strobe", "mine"]
        )
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_export(self, cli_runner, tmp_path):
        out = tmp_path / "out.js"
        result = cli_runner.invoke(
            cli, ["profile", "export", "line_trigger_strobe", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert out.read_text() == render_script(LINE_TRIGGER_STROBE)

    def test_import(self, cli_runner, script_file):
        result = cli_runner.invoke(
            cli, ["profile", "import", str(script_file), "--name", "from_js"]
        )
        assert result.exit_code == 0, result.output
        assert "Imported 'from_js' (21 operations)" in result.output
        assert load_profile("from_js").operations == LINE_TRIGGER_STROBE.operations

        result = cli_runner.invoke(
            cli, ["profile", "import", str(script_file), "--name", "from_js"]
        )
        assert result.exit_code == 1

        result = cli_runner.invoke(
            cli,
            ["profile", "import", str(script_file), "--name", "from_js", "--overwrite"],
        )
        assert result.exit_code == 0, result.output

    def test_import_invalid_profile(self, cli_runner, tmp_path):
        script = tmp_path / "no_stop.js"
        script.write_text('var g = grabbers[0];\ng.RemotePort.set("Width", 1);\n')

        result = cli_runner.invoke(cli, ["profile", "import", str(script)])
        assert result.exit_code == 1
        assert "can't be used as a profile" in result.output
