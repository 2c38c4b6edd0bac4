import io
import json

import pytest

from artycomp.console import Console
from artycomp.grid import grid_to_coordinates
from artycomp.pages import (
    App,
    Page,
    directory_page,
    gun_storage_page,
    intro_page,
    main,
    settings_page,
    storage_page,
    target_storage_page,
)
from artycomp.storage import Storage


def make_app(text, storage=None, path="unused.dat"):
    output = io.StringIO()
    console = Console(io.StringIO(text), output)
    return App(storage=storage, console=console, path=path), output


def storage_with_type():
    storage = Storage()
    storage.add_type("M119")
    return storage


def test_intro_page_leads_to_directory():
    app, output = make_app("\n")
    assert intro_page(app) is Page.DIRECTORY
    assert "WELCOME!" in output.getvalue()


@pytest.mark.parametrize(
    "command, expected",
    [("2", Page.SETTINGS), ("3", Page.STORAGE), ("1", None), ("4", None), ("9", None)],
)
def test_directory_commands(command, expected):
    app, _ = make_app(f"{command}\n")
    assert directory_page(app) is expected


def test_directory_rejects_out_of_range_command():
    app, output = make_app("12\n3\n")
    assert directory_page(app) is Page.STORAGE
    assert "COMMAND OUT OF RANGE" in output.getvalue()


def test_directory_save_writes_storage(tmp_path):
    path = tmp_path / "store.dat"
    app, _ = make_app("7\n", storage_with_type(), path)
    assert directory_page(app) is Page.DIRECTORY
    assert Storage.load(path).to_dict() == app.storage.to_dict()


def test_directory_load_reads_storage(tmp_path):
    path = tmp_path / "store.dat"
    stored = storage_with_type()
    stored.add_target("1234", 50)
    stored.save(path)
    app, _ = make_app("6\n", Storage(), path)
    assert directory_page(app) is Page.DIRECTORY
    assert app.storage.to_dict() == stored.to_dict()


def test_directory_load_missing_file_reports_error(tmp_path):
    app, output = make_app("6\n", Storage(), tmp_path / "missing" / "store.dat")
    assert directory_page(app) is Page.DIRECTORY
    assert "COULD NOT LOAD STORAGE" in output.getvalue()


def test_directory_save_and_exit(tmp_path):
    path = tmp_path / "store.dat"
    app, _ = make_app("8\n", storage_with_type(), path)
    assert directory_page(app) is None
    assert json.loads(path.read_text(encoding="utf-8"))["types"][0]["name"] == "M119"


def test_settings_page_sets_drag():
    app, _ = make_app("1\n1\n")
    assert settings_page(app) is Page.SETTINGS
    assert app.storage.settings.ace3_drag is True
    assert app.storage.settings.ace3_weather is False


def test_settings_page_rejects_other_values():
    app, output = make_app("2\n5\n1\n")
    assert settings_page(app) is Page.SETTINGS
    assert app.storage.settings.ace3_weather is True
    assert "VALUE MUST BE EITHER 1 OR 0" in output.getvalue()


def test_settings_go_back():
    app, _ = make_app("3\n")
    assert settings_page(app) is Page.DIRECTORY


@pytest.mark.parametrize(
    "command, expected",
    [("1", Page.TYPE_STORAGE), ("2", Page.GUN_STORAGE), ("3", Page.TARGET_STORAGE),
     ("4", Page.DIRECTORY)],
)
def test_storage_page(command, expected):
    app, _ = make_app(f"{command}\n")
    assert storage_page(app) is expected


def test_gun_storage_without_types_goes_back():
    app, output = make_app("1\n")
    assert gun_storage_page(app) is Page.STORAGE
    assert "NO GUN TYPES ARE DEFINED" in output.getvalue()


def test_add_first_gun():
    app, _ = make_app("1\n12345678\nY\n150\nY\n1\nY\n", storage_with_type())
    assert gun_storage_page(app) is Page.GUN_STORAGE
    gun = app.storage.get_gun(1)
    assert (gun.x, gun.y) == grid_to_coordinates("12345678")
    assert gun.elevation == 150
    assert gun.type_id == 1


def test_add_gun_rejects_bad_grid():
    app, output = make_app("1\nabcd\n1234\nY\n10\nY\n1\nY\n", storage_with_type())
    gun_storage_page(app)
    assert "ERROR" in output.getvalue()
    assert app.storage.get_gun(1).grid == "1234"


def test_remove_gun():
    storage = storage_with_type()
    storage.add_gun("1111", 10, 1)
    storage.add_gun("2222", 20, 1)
    app, _ = make_app("2\n1\nY\n", storage)
    assert gun_storage_page(app) is Page.GUN_STORAGE
    assert [gun.grid for gun in storage.guns] == ["2222"]


def test_edit_gun_elevation_and_listing():
    storage = storage_with_type()
    storage.add_gun("1111", 10, 1)
    app, output = make_app("4\n1\n300\n", storage)
    assert gun_storage_page(app) is Page.GUN_STORAGE
    assert storage.get_gun(1).elevation == 300
    assert "TYPE: M119" in output.getvalue()


def test_gun_storage_back():
    storage = storage_with_type()
    storage.add_gun("1111", 10, 1)
    app, _ = make_app("6\n", storage)
    assert gun_storage_page(app) is Page.STORAGE


def test_add_first_target_and_back():
    app, _ = make_app("1\n4321\nY\n75\nY\n")
    assert target_storage_page(app) is Page.TARGET_STORAGE
    target = app.storage.get_target(1)
    assert target.grid == "4321"
    assert target.elevation == 75
    app2, _ = make_app("2\n")
    assert target_storage_page(app2) is Page.DIRECTORY


def test_remove_target():
    storage = Storage()
    storage.add_target("1111", 1)
    storage.add_target("2222", 2)
    app, _ = make_app("2\n2\nY\n", storage)
    assert target_storage_page(app) is Page.TARGET_STORAGE
    assert [t.grid for t in storage.targets] == ["1111"]


def test_edit_target_elevation():
    storage = Storage()
    storage.add_target("1111", 1)
    app, _ = make_app("4\n1\n200\nN\n250\nY\n", storage)
    target_storage_page(app)
    assert storage.get_target(1).elevation == 250


def test_step_dispatches_type_storage():
    app, _ = make_app("2\n")
    app.page = Page.TYPE_STORAGE
    assert app.step() is Page.STORAGE
    assert app.page is Page.STORAGE


def test_run_until_exit():
    app, output = make_app("\n3\n4\n9\n")
    app.run()
    assert app.page is None
    assert "STORAGE" in output.getvalue()


def test_run_stops_at_end_of_input():
    app, _ = make_app("\n")
    app.run()
    assert app.page is None


def test_main_runs_with_given_file(tmp_path, monkeypatch):
    path = tmp_path / "store.dat"
    monkeypatch.setattr("sys.stdin", io.StringIO("\n8\n"))
    monkeypatch.setattr("sys.stdout", io.StringIO())
    assert main(["--file", str(path)]) == 0
    assert Storage.load(path).to_dict() == Storage().to_dict()