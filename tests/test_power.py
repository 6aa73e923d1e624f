from matissehal.power import set_interactive, sysfs_write


def _make(tmp_path):
    keys = tmp_path / "keys"
    screen = tmp_path / "screen"
    keys.write_text("")
    screen.write_text("")
    return keys, screen


def test_sysfs_write_writes_value(tmp_path):
    target = tmp_path / "enabled"
    target.write_text("")
    assert sysfs_write(target, "1") is True
    assert target.read_text() == "1"


def test_sysfs_write_missing_file(tmp_path):
    missing = tmp_path / "missing"
    assert sysfs_write(missing, "1") is False
    assert not missing.exists()


def test_set_interactive_on(tmp_path):
    keys, screen = _make(tmp_path)
    assert set_interactive(True, keys, screen) is True
    assert keys.read_text() == "1"
    assert screen.read_text() == "1"


def test_set_interactive_off(tmp_path):
    keys, screen = _make(tmp_path)
    assert set_interactive(False, keys, screen) is True
    assert keys.read_text() == "0"
    assert screen.read_text() == "0"


def test_set_interactive_partial_failure_still_writes_other(tmp_path):
    keys, screen = _make(tmp_path)
    assert set_interactive(True, tmp_path / "absent", screen) is False
    assert screen.read_text() == "1"
    assert keys.read_text() == ""