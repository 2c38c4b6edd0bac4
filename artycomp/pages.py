"""The menu pages of the artillery computer and the loop that moves between them."""

import argparse
import json
from enum import Enum

from .console import Console
from .grid import GridError, grid_to_coordinates
from .storage import DEFAULT_PATH, MAX_GUNS, MAX_TARGETS, Storage, StorageError
from .type_pages import type_storage_page

PAGE_SEPARATOR = "\n" * 20


class Page(str, Enum):
    """The pages of the computer, named as the pages name each other."""

    INTRO = "Intro"
    DIRECTORY = "Directory"
    QUICK_FIRE_MISSION = "QuickFireMission"
    SETTINGS = "Settings"
    STORAGE = "Storage"
    TYPE_STORAGE = "TypeStorage"
    GUN_STORAGE = "GunStorage"
    TARGET_STORAGE = "TargetStorage"
    FIRE_MISSION = "FireMission"
    GUIDE = "Guide"


_INTRO_TEXT = (
    "                        WELCOME!\n\n"
    "    THIS PROGRAM IS AN ARTILLERY COMPUTER FOR ARMA 3,\n"
    "    IT SUPPORTS THE USE OF EITHER ACE3 OR STANDARD\n"
    "    ARMA 3 PHYSICS.\n\n"
    "    THIS PROGRAM ALLOWS YOU TO INPUT YOUR GUN TYPES\n"
    "    AND AMMO TYPES WHICH DEFINE THE MUZZLE VELOCITY\n"
    "    AND THE AIRFRICTION OF THE ROUND BEING USED.\n\n"
    "    N   GUN TYPES AND ASSOCIATED AMMUNITION TYPES ARE\n"
    "    O   STORED IN THE FILE NAME TYPES&AMMO.DAT, WHICH\n"
    "    T   CAN EASILY BE EDITED BY YOU IN ANY TEXT\n"
    "    E   EDITOR OF YOUR CHOOSING.\n\n"
    "    FIRE MISSIONS ARE SAVED FOR THE DURATION THAT THE\n"
    "    PROGRAM IS RUNNING, AFTER WHICH ALL OF THE\n"
    "    COMPUTED FIRE MISSIONS ARE DISCARDED.\n\n"
    "    TO AID THE FDC, THE TARGETS CAN BE ASSIGNED TO A\n"
    "    GUN AUTOMATICALLY OR MANUALLY AND THE COMPUTER\n"
    "    COMES WITH PRE-DEFINED FIRE METHODS.\n\n"
)

_DIRECTORY_TEXT = (
    "    ->->->->->->->->->-> DIRECTORY PAGE <-<-<-<-<-<-<-<-<-<-\n\n"
    "    ><>< QUICK COMMANDS ><><\n\n"
    "    CREATE QUICK FIRE MISSION (1 TGT 1 GUN): 1\n\n"
    "    ><>< PAGE COMMANDS ><><\n\n"
    "    SETTINGS: 2\n"
    "    STORAGE: 3\n"
    "    FIRE MISSION: 4\n"
    "    GUIDE: 5\n\n"
    "    ><>< OTHER COMMANDS ><><\n"
    "    LOAD STORAGE: 6\n"
    "    SAVE STORAGE: 7\n"
    "    SAVE STORAGE AND EXIT PROGRAM: 8\n"
    "    EXIT PROGRAM WITHOUT SAVING: 9\n\n"
)

_STORAGE_TEXT = (
    "    ->->->->->->->->->-> STORAGE <-<-<-<-<-<-<-<-<-<-\n\n"
    "    ><>< COMMANDS ><><\n\n"
    "    TYPE STORAGE: 1\n"
    "    GUN STORAGE: 2\n"
    "    TARGET STORAGE: 3\n"
    "    GO BACK: 4\n\n"
)


class App:
    """The running computer: its storage, its console and the page on show."""

    def __init__(self, storage=None, console=None, path=DEFAULT_PATH):
        self.storage = storage if storage is not None else Storage()
        self.console = console if console is not None else Console()
        self.path = path
        self.page = Page.INTRO

    def save(self):
        """Write the storage to the data file, reporting failure on the console."""
        try:
            self.storage.save(self.path)
        except OSError:
            self.console.write("    ERROR: COULD NOT SAVE STORAGE\n\n")
            return False
        return True

    def load(self):
        """Replace the storage with the data file's, reporting failure on the console."""
        try:
            self.storage = Storage.load(self.path)
        except (OSError, ValueError, KeyError, TypeError, LookupError):
            self.console.write("    ERROR: COULD NOT LOAD STORAGE\n\n")
            return False
        return True

    def step(self):
        """Show the current page; return the next page, or None when the program ends."""
        if self.page is None:
            return None
        if self.page is not Page.INTRO:
            self.console.write(PAGE_SEPARATOR)
        handler = _HANDLERS.get(self.page)
        self.page = handler(self) if handler is not None else None
        return self.page

    def run(self):
        """Move from page to page until the program ends or input runs out."""
        try:
            while self.step() is not None:
                pass
        except EOFError:
            self.page = None


def intro_page(app):
    app.console.write(_INTRO_TEXT)
    app.console.read_line("    PRESS ENTER TO CONTINUE")
    return Page.DIRECTORY


def directory_page(app):
    app.console.write(_DIRECTORY_TEXT)
    command = app.console.enter_command(1, 9)
    if command == 1:
        return _HANDLERS_EXIT.get(Page.QUICK_FIRE_MISSION, Page.QUICK_FIRE_MISSION)
    if command == 2:
        return Page.SETTINGS
    if command == 3:
        return Page.STORAGE
    if command == 4:
        return _HANDLERS_EXIT.get(Page.FIRE_MISSION, Page.FIRE_MISSION)
    if command == 5:
        return _HANDLERS_EXIT.get(Page.GUIDE, Page.GUIDE)
    if command == 6:
        app.load()
        app.save()
        return Page.DIRECTORY
    if command == 7:
        app.save()
        return Page.DIRECTORY
    if command == 8:
        app.save()
    return None


def _read_setting(console, label):
    while True:
        value = console.read_int(f"    ENTER NEW VALUE FOR {label}: ")
        if value in (0, 1):
            return bool(value)
        console.write("    ERROR: VALUE MUST BE EITHER 1 OR 0!\n\n")


def settings_page(app):
    settings = app.storage.settings
    app.console.write(
        "    ->->->->->->->->->-> SETTINGS <-<-<-<-<-<-<-<-<-<-\n\n"
        "    ><>< SETTINGS AND THEIR COMMAND ID ><><\n\n"
        "    FORMAT: NAME, VALUE: COMMAND ID\n\n"
        "    VALUE FORMAT: 1 = TRUE, 0 = FALSE\n\n"
        f"    ACE3 DRAG,    {int(settings.ace3_drag)}:    1\n"
        f"    ACE3 WEATHER,    {int(settings.ace3_weather)}:    2\n\n\n"
        "    ><>< OTHER COMMANDS ><><\n\n"
        "    GO BACK: 3\n\n"
    )
    command = app.console.enter_command(1, 3)
    if command == 1:
        settings.ace3_drag = _read_setting(app.console, "ACE3 DRAG")
        return Page.SETTINGS
    if command == 2:
        settings.ace3_weather = _read_setting(app.console, "ACE3 WEATHER")
        return Page.SETTINGS
    return Page.DIRECTORY


def storage_page(app):
    app.console.write(_STORAGE_TEXT)
    command = app.console.enter_command(1, 4)
    return (Page.TYPE_STORAGE, Page.GUN_STORAGE, Page.TARGET_STORAGE, Page.DIRECTORY)[
        command - 1
    ]


def _type_storage(app):
    return Page(type_storage_page(app.storage, app.console))


# Shared prompts for guns and targets


def _read_grid(console, prompt):
    while True:
        grid = console.read_line(prompt).strip()
        try:
            if not grid:
                raise GridError("grid must have at least 2 digits")
            grid_to_coordinates(grid)
        except GridError as error:
            console.write(f"    ERROR: {str(error).upper()}\n\n")
            continue
        if console.confirm(f"    IS GRID {grid} CORRECT? (Y/N): "):
            return grid


def _read_elevation(console, prompt):
    while True:
        elevation = console.read_int(prompt)
        if console.confirm(f"    CONFIRM ELEVATION {elevation} IS CORRECT? (Y/N): "):
            return elevation


def _menu(console, commands, back):
    menu = "".join(f"    {label}: {number}\n" for number, (label, _) in enumerate(commands, 1))
    console.write(f"    ><>< COMMANDS ><><\n\n{menu}    GO BACK: {back}\n\n")
    return console.enter_command(1, back)


# Guns


def _enter_gun(app):
    return app.console.enter_id("    ENTER GUN ID: ", len(app.storage.guns), "GUN NOT DEFINED")


def _enter_gun_type(app):
    while True:
        type_id = app.console.enter_id(
            "    ENTER GUN TYPE: ", len(app.storage.types), "GUN TYPE NOT DEFINED"
        )
        if app.console.confirm(f"    CONFIRM GUN TYPE {type_id} IS CORRECT (Y/N):"):
            return type_id


def _add_gun(app):
    grid = _read_grid(app.console, "    ENTER GUN GRID (MAX 10 DIGITS, MIN 2 DIGITS): ")
    elevation = _read_elevation(app.console, "    ENTER GUN ELEVATION: ")
    type_id = _enter_gun_type(app)
    app.storage.add_gun(grid, elevation, type_id)


def _remove_gun(app):
    gun_id = _enter_gun(app)
    if app.console.confirm(f"    CONFIRM REMOVE GUN {gun_id} (Y/N): "):
        app.storage.remove_gun(gun_id)


def _edit_gun_grid(app):
    gun_id = _enter_gun(app)
    grid = _read_grid(
        app.console, f"    ENTER NEW GRID FOR GUN {gun_id} (MAX 10 DIGITS, MIN 2 DIGITS): "
    )
    app.storage.set_gun_grid(gun_id, grid)


def _edit_gun_elevation(app):
    gun_id = _enter_gun(app)
    elevation = app.console.read_int(f"    ENTER NEW ELEVATION FOR GUN {gun_id}: ")
    app.storage.set_gun_elevation(gun_id, elevation)


def _edit_gun_type(app):
    gun_id = _enter_gun(app)
    app.console.write("\n".join(app.storage.list_types(False)) + "\n\n")
    type_id = app.console.enter_id(
        "    ENTER GUN TYPE ID: ", len(app.storage.types), "GUN TYPE NOT DEFINED"
    )
    app.storage.set_gun_type(gun_id, type_id)


_GUN_COMMANDS = (
    ("ADD GUN", _add_gun),
    ("REMOVE GUN", _remove_gun),
    ("EDIT GUN GRID", _edit_gun_grid),
    ("EDIT GUN ELEVATION", _edit_gun_elevation),
    ("EDIT GUN TYPE", _edit_gun_type),
)


def _type_name(storage, type_id):
    try:
        return storage.get_type(type_id).name
    except StorageError:
        return ""


def gun_storage_page(app):
    storage, console = app.storage, app.console
    console.write(
        "    ->->->->->->->->->-> GUN STORAGE <-<-<-<-<-<-<-<-<-<-\n"
        "    \n"
        "    ><>< GUNS ><><\n"
        "    \n"
    )

    if not storage.types:
        console.write(
            "    NO GUN TYPES ARE DEFINED THEREFORE NO GUNS\n"
            "    ARE DEFINED NOR CAN NEW GUNS BE DEFINED\n\n"
            "    ><>< COMMANDS ><><\n\n"
            "    GO BACK: 1\n\n"
        )
        console.enter_command(1, 1)
        return Page.STORAGE

    if not storage.guns:
        console.write(
            "    NO GUNS DEFINED\n\n"
            "    ><>< COMMANDS ><><\n\n"
            "    ADD GUN: 1\n"
            "    GO BACK: 2\n\n\n"
        )
        if console.enter_command(1, 2) == 1:
            _add_gun(app)
            return Page.GUN_STORAGE
        return Page.STORAGE

    for gun_id, gun in enumerate(storage.guns, start=1):
        console.write(
            f"    GUN {gun_id}:    TYPE: {_type_name(storage, gun.type_id)},    "
            f"GRID: {gun.grid:>10},    ELEVATION: {gun.elevation}\n"
        )
    console.write("\n")

    commands = _GUN_COMMANDS[1:] if len(storage.guns) >= MAX_GUNS else _GUN_COMMANDS
    back = len(commands) + 1
    command = _menu(console, commands, back)
    if command == back:
        return Page.STORAGE
    commands[command - 1][1](app)
    return Page.GUN_STORAGE


# Targets


def _enter_target(app):
    return app.console.enter_id(
        "    ENTER TARGET ID: ", len(app.storage.targets), "TARGET NOT DEFINED"
    )


def _add_target(app):
    grid = _read_grid(app.console, "    ENTER TARGET GRID (MAX 10 DIGITS, MIN 2 DIGITS): ")
    elevation = _read_elevation(app.console, "    ENTER TARGET ELEVATION (METERS): ")
    app.storage.add_target(grid, elevation)


def _remove_target(app):
    target_id = _enter_target(app)
    if app.console.confirm(f"    ARE YOU SURE YOU WISH TO REMOVE TARGET {target_id}? (Y/N): "):
        app.storage.remove_target(target_id)


def _edit_target_grid(app):
    target_id = _enter_target(app)
    grid = _read_grid(app.console, "    ENTER NEW GRID (MAX 10 DIGITS, MIN 2 DIGITS): ")
    app.storage.set_target_grid(target_id, grid)


def _edit_target_elevation(app):
    target_id = _enter_target(app)
    elevation = _read_elevation(app.console, "    ENTER NEW ELEVATION: ")
    app.storage.set_target_elevation(target_id, elevation)


_TARGET_COMMANDS = (
    ("ADD TARGET", _add_target),
    ("REMOVE TARGET", _remove_target),
    ("EDIT TARGET GRID", _edit_target_grid),
    ("EDIT TARGET ELEVATION", _edit_target_elevation),
)


def target_storage_page(app):
    storage, console = app.storage, app.console
    console.write(
        "    ->->->->->->->->->-> TARGET STORAGE <-<-<-<-<-<-<-<-<-<-\n\n"
        "    ><>< TARGETS ><><\n\n"
    )

    if not storage.targets:
        console.write(
            "    NO TARGETS DEFINED\n\n"
            "    ><>< COMMANDS ><><\n\n"
            "    ADD TARGET: 1\n"
            "    GO BACK: 2\n\n"
        )
        if console.enter_command(1, 2) == 1:
            _add_target(app)
            return Page.TARGET_STORAGE
        return Page.DIRECTORY

    for target_id, target in enumerate(storage.targets, start=1):
        console.write(
            f"    TARGET {target_id}:    GRID: {target.grid:>10},    "
            f"ELEVATION: {target.elevation}\n"
        )
    console.write("\n")

    commands = _TARGET_COMMANDS[1:] if len(storage.targets) >= MAX_TARGETS else _TARGET_COMMANDS
    back = len(commands) + 1
    command = _menu(console, commands, back)
    if command == back:
        return Page.DIRECTORY
    commands[command - 1][1](app)
    return Page.TARGET_STORAGE


# Pages that end the program rather than being shown.
_HANDLERS_EXIT = {
    Page.QUICK_FIRE_MISSION: None,
    Page.FIRE_MISSION: None,
    Page.GUIDE: None,
}

_HANDLERS = {
    Page.INTRO: intro_page,
    Page.DIRECTORY: directory_page,
    Page.SETTINGS: settings_page,
    Page.STORAGE: storage_page,
    Page.TYPE_STORAGE: _type_storage,
    Page.GUN_STORAGE: gun_storage_page,
    Page.TARGET_STORAGE: target_storage_page,
}


def main(argv=None):
    """Start the interactive artillery computer."""
    parser = argparse.ArgumentParser(description="Interactive artillery computer.")
    parser.add_argument("--file", default=DEFAULT_PATH, help="storage file to load and save")
    args = parser.parse_args(argv)
    App(path=args.file).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

# json is used by the storage file format; kept importable for callers that
# inspect saved files alongside the app.
_ = json