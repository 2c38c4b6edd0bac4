"""In-memory store of gun types, ammunition, guns and targets."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from .grid import grid_to_coordinates

MAX_TYPES = 25
MAX_AMMO = 5
MAX_CHARGES = 20
MAX_GUNS = 10
MAX_TARGETS = 50
MAX_NAME_LENGTH = 50

DEFAULT_PATH = "Types&Ammo.dat"


class StorageError(LookupError):
    """Raised when an id refers to nothing stored."""


class StorageFullError(StorageError):
    """Raised when a limit on stored items is reached."""


@dataclass
class Charge:
    """A propellant charge: muzzle velocity in m/s and maximum range in metres."""

    velocity: float
    max_range: int = 0


@dataclass
class Ammo:
    """An ammunition type with its air friction and charges."""

    name: str
    air_friction: float = 0.0
    charges: list = field(default_factory=list)


@dataclass
class GunType:
    """A kind of gun and the ammunition it fires."""

    name: str
    ammo: list = field(default_factory=list)


@dataclass
class Gun:
    """A gun placed on the map."""

    grid: str
    x: int
    y: int
    elevation: int
    type_id: int


@dataclass
class Target:
    """A target placed on the map."""

    grid: str
    x: int
    y: int
    elevation: int


@dataclass
class Settings:
    """Physics options."""

    ace3_drag: bool = False
    ace3_weather: bool = False


def _lookup(items, item_id, what):
    if not 1 <= item_id <= len(items):
        raise StorageError(f"{what} {item_id} not defined")
    return items[item_id - 1]


def _check_name(name):
    if not name or len(name) > MAX_NAME_LENGTH:
        raise ValueError(f"name must be 1 to {MAX_NAME_LENGTH} characters")
    return name


def _check_air_friction(air_friction):
    air_friction = float(air_friction)
    if air_friction > 0:
        raise ValueError("air friction must be less than or equal to 0")
    return air_friction


def _placed(grid):
    x, y = grid_to_coordinates(grid)
    if len(grid) % 2:
        grid = "0" + grid
    return grid, x, y


@dataclass
class Storage:
    """Everything the computer keeps: types, guns, targets and settings.

    All ids handed to and returned by the methods start from 1.
    """

    types: list = field(default_factory=list)
    guns: list = field(default_factory=list)
    targets: list = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)

    # Gun types and ammunition

    def add_type(self, name):
        """Add a gun type and return its id."""
        if len(self.types) >= MAX_TYPES:
            raise StorageFullError("gun type limit reached")
        self.types.append(GunType(_check_name(name)))
        return len(self.types)

    def remove_type(self, type_id):
        """Remove a gun type; later types move down one id."""
        _lookup(self.types, type_id, "gun type")
        del self.types[type_id - 1]

    def rename_type(self, type_id, name):
        self.get_type(type_id).name = _check_name(name)

    def get_type(self, type_id):
        return _lookup(self.types, type_id, "gun type")

    def add_ammo(self, type_id, name, air_friction):
        """Add an ammunition type to a gun type and return its id."""
        gun_type = self.get_type(type_id)
        if len(gun_type.ammo) >= MAX_AMMO:
            raise StorageFullError("ammo limit reached for this gun type")
        gun_type.ammo.append(Ammo(_check_name(name), _check_air_friction(air_friction)))
        return len(gun_type.ammo)

    def get_ammo(self, type_id, ammo_id):
        return _lookup(self.get_type(type_id).ammo, ammo_id, "ammo type")

    def rename_ammo(self, type_id, ammo_id, name):
        self.get_ammo(type_id, ammo_id).name = _check_name(name)

    def set_air_friction(self, type_id, ammo_id, air_friction):
        self.get_ammo(type_id, ammo_id).air_friction = _check_air_friction(air_friction)

    def add_charge(self, type_id, ammo_id, velocity, max_range):
        """Add a charge to an ammunition type and return its number."""
        ammo = self.get_ammo(type_id, ammo_id)
        if len(ammo.charges) >= MAX_CHARGES:
            raise StorageFullError("ammo has maximum amount of charges")
        ammo.charges.append(Charge(float(velocity), int(max_range)))
        return len(ammo.charges)

    def set_charge_velocity(self, type_id, ammo_id, charge_id, velocity):
        ammo = self.get_ammo(type_id, ammo_id)
        _lookup(ammo.charges, charge_id, "charge").velocity = float(velocity)

    # Guns

    def add_gun(self, grid, elevation, type_id):
        """Place a gun of a stored type and return its id."""
        if len(self.guns) >= MAX_GUNS:
            raise StorageFullError("gun limit reached")
        self.get_type(type_id)
        grid, x, y = _placed(grid)
        self.guns.append(Gun(grid, x, y, int(elevation), type_id))
        return len(self.guns)

    def remove_gun(self, gun_id):
        """Remove a gun; later guns move down one id."""
        _lookup(self.guns, gun_id, "gun")
        del self.guns[gun_id - 1]

    def get_gun(self, gun_id):
        return _lookup(self.guns, gun_id, "gun")

    def set_gun_grid(self, gun_id, grid):
        gun = self.get_gun(gun_id)
        gun.grid, gun.x, gun.y = _placed(grid)

    def set_gun_elevation(self, gun_id, elevation):
        self.get_gun(gun_id).elevation = int(elevation)

    def set_gun_type(self, gun_id, type_id):
        gun = self.get_gun(gun_id)
        self.get_type(type_id)
        gun.type_id = type_id

    # Targets

    def add_target(self, grid, elevation):
        """Place a target and return its id."""
        if len(self.targets) >= MAX_TARGETS:
            raise StorageFullError("target limit reached")
        grid, x, y = _placed(grid)
        self.targets.append(Target(grid, x, y, int(elevation)))
        return len(self.targets)

    def remove_target(self, target_id):
        """Remove a target; later targets move down one id."""
        _lookup(self.targets, target_id, "target")
        del self.targets[target_id - 1]

    def get_target(self, target_id):
        return _lookup(self.targets, target_id, "target")

    def set_target_grid(self, target_id, grid):
        target = self.get_target(target_id)
        target.grid, target.x, target.y = _placed(grid)

    def set_target_elevation(self, target_id, elevation):
        self.get_target(target_id).elevation = int(elevation)

    # Listings

    def list_types(self, with_ammo):
        """Return one line per gun type, each followed by its ammo lines if asked."""
        if not self.types:
            raise StorageError("no gun types defined")
        lines = []
        for type_id, gun_type in enumerate(self.types, start=1):
            lines.append(
                f"    TYPE NAME: {gun_type.name}, TYPE ID: {type_id}, "
                f"TYPE AMMO COUNT: {len(gun_type.ammo)}"
            )
            if with_ammo and gun_type.ammo:
                lines.extend(self.list_ammo(type_id))
        return lines

    def list_ammo(self, type_id):
        """Return one line per ammunition type of a gun type."""
        gun_type = self.get_type(type_id)
        if not gun_type.ammo:
            raise StorageError("no ammo defined for this gun type")
        return [
            f"        AMMO NAME: {ammo.name}, AMMO ID: {ammo_id}, "
            f"AMMO CHARGE COUNT: {len(ammo.charges)}"
            for ammo_id, ammo in enumerate(gun_type.ammo, start=1)
        ]

    def list_charges(self, type_id, ammo_id):
        """Return one line per charge of an ammunition type."""
        ammo = self.get_ammo(type_id, ammo_id)
        return [
            f"        CHARGE: {charge_id}, MAX RANGE: {charge.max_range}"
            for charge_id, charge in enumerate(ammo.charges, start=1)
        ]

    # Persistence

    def to_dict(self):
        return {
            "settings": {
                "ace3_drag": self.settings.ace3_drag,
                "ace3_weather": self.settings.ace3_weather,
            },
            "types": [
                {
                    "name": gun_type.name,
                    "ammo": [
                        {
                            "name": ammo.name,
                            "air_friction": ammo.air_friction,
                            "charges": [
                                {"velocity": c.velocity, "max_range": c.max_range}
                                for c in ammo.charges
                            ],
                        }
                        for ammo in gun_type.ammo
                    ],
                }
                for gun_type in self.types
            ],
            "guns": [
                {"grid": g.grid, "elevation": g.elevation, "type_id": g.type_id}
                for g in self.guns
            ],
            "targets": [{"grid": t.grid, "elevation": t.elevation} for t in self.targets],
        }

    @classmethod
    def from_dict(cls, data):
        """Rebuild a store, checking every limit on the way."""
        storage = cls()
        settings = data.get("settings", {})
        storage.settings = Settings(
            bool(settings.get("ace3_drag", False)),
            bool(settings.get("ace3_weather", False)),
        )
        for type_data in data.get("types", []):
            type_id = storage.add_type(type_data["name"])
            for ammo_data in type_data.get("ammo", []):
                ammo_id = storage.add_ammo(type_id, ammo_data["name"], ammo_data["air_friction"])
                for charge in ammo_data.get("charges", []):
                    storage.add_charge(type_id, ammo_id, charge["velocity"], charge["max_range"])
        for gun in data.get("guns", []):
            storage.add_gun(gun["grid"], gun["elevation"], gun["type_id"])
        for target in data.get("targets", []):
            storage.add_target(target["grid"], target["elevation"])
        return storage

    def save(self, path=DEFAULT_PATH):
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path=DEFAULT_PATH):
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))