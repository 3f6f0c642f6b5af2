import os
import zipfile

from mrpack.cli import main


def _make_job(root, name="myjob", files=("Mapper.x",)):
    job = root / name
    job.mkdir()
    for filename in files:
        (job / filename).write_text("")
    return job


def test_end_to_end_mapper_only(tmp_path, capsys):
    job = _make_job(tmp_path)
    out = tmp_path / "out"
    out.mkdir()

    rc = main(["-t", "UTC", str(job), str(out)])

    assert rc == 0
    archive = out / "myjob.pyz"
    script = out / "myjob.sh"
    assert sorted(os.listdir(out)) == ["myjob.pyz", "myjob.sh"]

    with zipfile.ZipFile(archive) as zf:
        names = zf.namelist()
        bootstrap = zf.read("__main__.py").decode("utf-8")
    assert "Mapper.x" in names
    assert "mrpack_runtime/_run.py" in names
    assert names.index("mrpack_runtime/_run.py") < names.index("Mapper.x")
    assert "os.environ['TZ'] = 'UTC'" in bootstrap
    assert "builtins.MRPACK_DEBUG = False" in bootstrap

    body = script.read_text()
    assert "-D mapred.reduce.tasks=0 \\\n-mapper 'python3 myjob.pyz mapper' \\\n" in body
    assert body.endswith("-file $dir/myjob.pyz\n")

    printed = capsys.readouterr().out
    assert str(script) in printed
    assert str(archive) in printed
    assert "chmod" in printed


def test_include_paths_are_bundled_after_job(tmp_path):
    job = _make_job(tmp_path, files=("Mapper.py", "Reducer.py"))
    extra = tmp_path / "shared"
    (extra / "helpers").mkdir(parents=True)
    (extra / "helpers" / "text.py").write_text("")
    (extra / ".svn").mkdir()
    (extra / ".svn" / "entries").write_text("")
    out = tmp_path / "out"
    out.mkdir()

    rc = main(["--debug", "-i", str(extra), "-t", "UTC", str(job), str(out)])

    assert rc == 0
    with zipfile.ZipFile(out / "myjob.pyz") as zf:
        names = zf.namelist()
        bootstrap = zf.read("__main__.py").decode("utf-8")
    assert names.index("Reducer.py") < names.index("helpers/text.py")
    assert not any(".svn" in name for name in names)
    assert "builtins.MRPACK_DEBUG = True" in bootstrap
    assert "-reducer 'python3 myjob.pyz reducer' \\\n-mapper" in (out / "myjob.sh").read_text()


def test_options_may_follow_positionals(tmp_path):
    job = _make_job(tmp_path)
    out = tmp_path / "out"
    out.mkdir()

    assert main([str(job), str(out), "-t", "UTC"]) == 0


def test_help_prints_usage_and_exits_1(capsys):
    assert main(["--help"]) == 1
    assert "Usage: compile [OPTION]... JOBDIR OUTPUTDIR" in capsys.readouterr().out


def test_missing_positionals_is_a_usage_error(tmp_path, capsys):
    assert main([str(tmp_path)]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_invalid_timezone_exit_code(tmp_path, capsys):
    job = _make_job(tmp_path)
    out = tmp_path / "out"
    out.mkdir()

    assert main(["-t", "Nowhere/Fake", str(job), str(out)]) == 1
    assert "Invalid timezone 'Nowhere/Fake'." in capsys.readouterr().err
    assert os.listdir(out) == []


def test_readonly_host_exit_code(tmp_path, monkeypatch, capsys):
    job = _make_job(tmp_path)
    out = tmp_path / "out"
    out.mkdir()
    monkeypatch.setenv("MRPACK_ARCHIVE_READONLY", "yes")

    assert main(["-t", "UTC", str(job), str(out)]) == 2
    assert "Archive write mode not allowed" in capsys.readouterr().err
    assert os.listdir(out) == []


def test_explicit_empty_timezone_exit_code(tmp_path, capsys):
    job = _make_job(tmp_path)
    out = tmp_path / "out"
    out.mkdir()

    assert main(["-t", "", str(job), str(out)]) == 1
    assert "Invalid timezone ''." in capsys.readouterr().err
    assert os.listdir(out) == []


def test_tz_path_defaults_to_host_zone(tmp_path, monkeypatch):
    job = _make_job(tmp_path)
    out = tmp_path / "out"
    out.mkdir()
    zone_file = tmp_path / "zoneinfo" / "Etc" / "UTC"
    zone_file.parent.mkdir(parents=True)
    zone_file.write_bytes(b"TZif")
    localtime = tmp_path / "localtime"
    localtime.symlink_to(zone_file)
    monkeypatch.setenv("TZ", f":{localtime}")

    assert main([str(job), str(out)]) == 0
    with zipfile.ZipFile(out / "myjob.pyz") as zf:
        assert "os.environ['TZ'] = 'Etc/UTC'" in zf.read("__main__.py").decode("utf-8")


def test_broken_symlink_in_job_exit_code(tmp_path, capsys):
    job = _make_job(tmp_path)
    (job / "helper.py").symlink_to(job / "gone.py")
    out = tmp_path / "out"
    out.mkdir()

    assert main(["-t", "UTC", str(job), str(out)]) == 1
    assert "helper.py" in capsys.readouterr().err
    assert os.listdir(out) == []


def test_non_utf8_arguments_file_exit_code(tmp_path, capsys):
    job = _make_job(tmp_path)
    (job / "ARGUMENTS").write_bytes(b"-foo \xff bar")
    out = tmp_path / "out"
    out.mkdir()

    assert main(["-t", "UTC", str(job), str(out)]) == 1
    assert "ARGUMENTS" in capsys.readouterr().err
    assert os.listdir(out) == []


def test_last_two_positionals_are_job_and_output(tmp_path):
    job = _make_job(tmp_path)
    out = tmp_path / "out"
    out.mkdir()

    assert main(["-t", "UTC", "extra", str(job), str(out)]) == 0
    assert sorted(os.listdir(out)) == ["myjob.pyz", "myjob.sh"]


def test_readonly_host_checked_before_paths(tmp_path, monkeypatch):
    monkeypatch.setenv("MRPACK_ARCHIVE_READONLY", "1")

    rc = main(["-t", "UTC", str(tmp_path / "nojob"), str(tmp_path / "noout")])

    assert rc == 2


def test_scripts_entrypoint_uses_cli_main():
    from scripts import compile as compile_script

    assert compile_script.main is main
