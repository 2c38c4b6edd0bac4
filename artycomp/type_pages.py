"""The gun type storage page: gun types, their ammunition and charges."""

from .storage import MAX_AMMO, MAX_CHARGES, MAX_NAME_LENGTH, MAX_TYPES

TYPE_STORAGE = "TypeStorage"
STORAGE = "Storage"

_HEADER = (
    "    ->->->->->->->->->-> GUN TYPES <-<-<-<-<-<-<-<-<-<-\n"
    "    \n"
    "    ><>< GUN TYPES ><><\n"
    "    \n"
)


def _read_name(console, prompt):
    """Read the first word of a line, at most MAX_NAME_LENGTH characters."""
    while True:
        words = console.read_line(prompt).split()
        if words:
            return words[0][:MAX_NAME_LENGTH]


def _enter_type(storage, console):
    return console.enter_id("    ENTER GUN TYPE ID: ", len(storage.types), "GUN TYPE NOT DEFINED")


def _enter_ammo(storage, console, type_id):
    """Ask for an ammo id of a type, or return None if the type has no ammo."""
    count = len(storage.get_type(type_id).ammo)
    if not count:
        console.write("    ERROR: NO AMMO DEFINED FOR THIS GUN TYPE\n\n")
        return None
    return console.enter_id("    ENTER AMMO TYPE ID: ", count, "AMMO TYPE NOT DEFINED")


def _read_air_friction(console):
    while True:
        value = console.read_float("    ENTER AMMO AIR FRICTION: ")
        if value <= 0:
            return value
        console.write("    ERROR: AIR FRICTION MUST BE LESS THAN OR EQUAL TO 0\n\n")


def _read_charge(console):
    while True:
        velocity = console.read_float("    ENTER MUZZLE VELOCITY (M/S): ")
        if velocity > 0:
            break
        console.write("    ERROR: MUZZLE VELOCITY MUST BE GREATER THAN 0\n\n")
    while True:
        max_range = console.read_int("    ENTER MAX RANGE (M): ")
        if max_range >= 0:
            return velocity, max_range
        console.write("    ERROR: MAX RANGE MUST NOT BE NEGATIVE\n\n")


def _add_type(storage, console):
    while True:
        name = _read_name(console, f"    ENTER GUN TYPE NAME (MAX {MAX_NAME_LENGTH} CHARACTERS): ")
        if console.confirm(f"    IS TYPE NAME {name} CORRECT? (Y/N): "):
            break
    storage.add_type(name)


def _add_ammo(storage, console, type_id):
    """Add one ammo type with its first charge; return False if the type is full."""
    if len(storage.get_type(type_id).ammo) >= MAX_AMMO:
        console.write("    ERROR: GUN TYPE HAS MAXIMUM AMOUNT OF AMMO TYPES!\n\n")
        return False
    name = _read_name(console, f"    ENTER AMMO TYPE NAME (MAX {MAX_NAME_LENGTH} CHARACTERS): ")
    air_friction = _read_air_friction(console)
    velocity, max_range = _read_charge(console)
    ammo_id = storage.add_ammo(type_id, name, air_friction)
    storage.add_charge(type_id, ammo_id, velocity, max_range)
    return True


def _add_charge(storage, console, type_id, ammo_id):
    velocity, max_range = _read_charge(console)
    storage.add_charge(type_id, ammo_id, velocity, max_range)


def _remove_type(storage, console):
    while True:
        type_id = _enter_type(storage, console)
        name = storage.get_type(type_id).name
        if console.confirm(f"    ARE YOU SURE YOU WISH TO REMOVE {name}? (Y/N): "):
            break
    storage.remove_type(type_id)


def _rename_type(storage, console):
    type_id = _enter_type(storage, console)
    while True:
        name = _read_name(console, f"    ENTER NEW TYPE NAME (MAX {MAX_NAME_LENGTH} CHARACTERS): ")
        console.write(f"    NEW STORED TYPE NAME: {name}\n")
        if console.confirm("    IS THE NEW STORED NAME CORRECT? (Y/N): "):
            break
    storage.rename_type(type_id, name)


def _add_ammo_page(storage, console):
    type_id = _enter_type(storage, console)
    if not _add_ammo(storage, console, type_id):
        return
    while console.confirm(
        "    DO YOU WISH TO ADD ANOTHER AMMO TYPE TO THIS GUN TYPE? (Y/N): "
    ):
        if not _add_ammo(storage, console, type_id):
            return


def _rename_ammo(storage, console):
    type_id = _enter_type(storage, console)
    ammo_id = _enter_ammo(storage, console, type_id)
    if ammo_id is None:
        return
    while True:
        name = _read_name(
            console, f"    ENTER NEW AMMO TYPE NAME (MAX {MAX_NAME_LENGTH} CHARACTERS): "
        )
        console.write(f"    NEW STORED AMMO TYPE NAME: {name}\n")
        if console.confirm("    IS THE NEW STORED NAME CORRECT? (Y/N): "):
            break
    storage.rename_ammo(type_id, ammo_id, name)


def _edit_air_friction(storage, console):
    type_id = _enter_type(storage, console)
    ammo_id = _enter_ammo(storage, console, type_id)
    if ammo_id is None:
        return
    while True:
        air_friction = _read_air_friction(console)
        console.write(f"    STORED AMMO AIR FRICTION: {air_friction:f}\n")
        if console.confirm("    IS THE STORED AMMO AIR FRICTION CORRECT? (Y/N): "):
            break
    storage.set_air_friction(type_id, ammo_id, air_friction)


def _add_charge_page(storage, console):
    type_id = _enter_type(storage, console)
    gun_type = storage.get_type(type_id)
    if all(len(ammo.charges) >= MAX_CHARGES for ammo in gun_type.ammo):
        if gun_type.ammo:
            console.write("    ERROR: AMMO HAS MAXIMUM AMOUNT OF CHARGES!\n\n")
        else:
            console.write("    ERROR: NO AMMO DEFINED FOR THIS GUN TYPE\n\n")
        return
    while True:
        ammo_id = _enter_ammo(storage, console, type_id)
        if len(storage.get_ammo(type_id, ammo_id).charges) < MAX_CHARGES:
            break
        console.write("    ERROR: AMMO HAS MAXIMUM AMOUNT OF CHARGES!\n\n")
    _add_charge(storage, console, type_id, ammo_id)
    while console.confirm(f"    DO YOU WISH TO ADD ANOTHER CHARGE? (MAX {MAX_CHARGES}) (Y/N): "):
        if len(storage.get_ammo(type_id, ammo_id).charges) >= MAX_CHARGES:
            console.write("    ERROR: AMMO HAS MAXIMUM AMOUNT OF CHARGES!\n\n")
            return
        _add_charge(storage, console, type_id, ammo_id)


def _edit_charge(storage, console):
    type_id = _enter_type(storage, console)
    ammo_id = _enter_ammo(storage, console, type_id)
    if ammo_id is None:
        return
    count = len(storage.get_ammo(type_id, ammo_id).charges)
    if not count:
        console.write("    ERROR: CHARGE NOT DEFINED\n\n")
        return
    while True:
        charge_id = console.read_int("    ENTER CHARGE: ")
        console.write("\n")
        if 1 <= charge_id <= count:
            break
        console.write("    ERROR: CHARGE NOT DEFINED\n\n")
    velocity = console.read_float(f"    ENTER NEW MUZZLE VELOCITY FOR CHARGE {charge_id}: ")
    storage.set_charge_velocity(type_id, ammo_id, charge_id, velocity)


_COMMANDS = (
    ("ADD GUN TYPE", _add_type),
    ("REMOVE GUN TYPE", _remove_type),
    ("EDIT GUN TYPE NAME", _rename_type),
    ("ADD AMMO", _add_ammo_page),
    ("EDIT AMMO NAME", _rename_ammo),
    ("EDIT AMMO AIR FRICTION", _edit_air_friction),
    ("ADD AMMO CHARGE", _add_charge_page),
    ("EDIT AMMO CHARGE", _edit_charge),
)


def type_storage_page(storage, console):
    """Show the gun types, carry out one command and return the name of the next page."""
    console.write(_HEADER)

    if not storage.types:
        console.write(
            "    NO GUN TYPES DEFINED\n\n"
            "    ><>< COMMANDS ><><\n\n"
            "    ADD GUN TYPE: 1\n\n"
            "    GO BACK: 2\n\n"
        )
        if console.enter_command(1, 2) == 1:
            _add_type(storage, console)
            return TYPE_STORAGE
        return STORAGE

    console.write("\n".join(storage.list_types(True)) + "\n\n")

    commands = _COMMANDS[1:] if len(storage.types) >= MAX_TYPES else _COMMANDS
    back = len(commands) + 1
    menu = "".join(f"    {label}: {number}\n" for number, (label, _) in enumerate(commands, 1))
    console.write(f"    ><>< COMMANDS ><><\n\n{menu}\n    GO BACK: {back}\n\n")

    command = console.enter_command(1, back)
    if command == back:
        return STORAGE
    commands[command - 1][1](storage, console)
    return TYPE_STORAGE