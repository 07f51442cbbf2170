import gentoo_installer.main as main

PROFILE = """
disk = "/dev/sdX"
hostname = "h"
username = "u"
usergroups = ["wheel"]
desktop = "gnome"
mount_point = "{mnt}"
files_dir = "{files}"

[packages]
system = ["a"]
gnome = ["b"]
apps = ["c"]
fonts = ["d"]
"""


def test_missing_profile_exits_1(tmp_path, runner):
    rc = main.main(["--dry-run", "--config", str(tmp_path / "missing.toml"), "--log", str(tmp_path / "i.log")])

    assert rc == 1
    assert runner.calls == []


def test_unsupported_disk_exits_1(tmp_path, runner, files_dir):
    cfg = tmp_path / "p.toml"
    text = PROFILE.format(mnt=tmp_path / "gentoo", files=files_dir).replace("/dev/sdX", "/dev/nvme0n1")
    cfg.write_text(text, encoding="utf-8")

    rc = main.main(["--dry-run", "--config", str(cfg), "--log", str(tmp_path / "i.log")])

    assert rc == 1


def test_dry_run_succeeds(tmp_path, runner, files_dir):
    cfg = tmp_path / "p.toml"
    cfg.write_text(PROFILE.format(mnt=tmp_path / "gentoo", files=files_dir), encoding="utf-8")

    rc = main.main(["--dry-run", "--config", str(cfg), "--log", str(tmp_path / "i.log")])

    assert rc == 0
    assert runner.calls == []


def test_select_disk_overrides_profile(tmp_path, runner, files_dir, monkeypatch):
    cfg = tmp_path / "p.toml"
    cfg.write_text(PROFILE.format(mnt=tmp_path / "gentoo", files=files_dir), encoding="utf-8")
    seen = {}

    def fake_run(profile, **kwargs):
        seen["disk"] = profile.disk
        return main.PipelineResult(ran_steps=[])

    monkeypatch.setattr("builtins.input", lambda prompt: "/dev/vdb")
    monkeypatch.setattr(main, "run", fake_run)

    rc = main.main(["--dry-run", "--select-disk", "--config", str(cfg), "--log", str(tmp_path / "i.log")])

    assert rc == 0
    assert seen["disk"] == "/dev/vdb"


def test_prompt_disk_keeps_default_on_empty_answer(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "  ")

    assert main.prompt_disk("/dev/sda") == "/dev/sda"


def test_undecodable_profile_exits_1(tmp_path, runner):
    cfg = tmp_path / "p.toml"
    cfg.write_bytes(b'disk = "\xff"\n')

    rc = main.main(["--dry-run", "--config", str(cfg), "--log", str(tmp_path / "i.log")])

    assert rc == 1
