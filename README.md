# artycomp

An artillery fire-direction computer for the console. It has two parts:

- an interactive menu program that keeps a store of gun types, their
  ammunition and charges, guns and targets, and saves it to a file;
- a firing-solution calculator that finds the elevation putting a shell on a
  target by stepping the shell's flight through air whose density follows
  temperature, pressure, humidity and altitude.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## The interactive computer

```
artycomp [--file PATH]
```

After the welcome text, the directory page offers:

- `2` settings: the ACE3 drag and ACE3 weather switches (0 or 1);
- `3` storage: type storage, gun storage and target storage pages, where gun
  types, ammunition, charges, guns and targets are added, edited and removed;
- `6` load the store from the file (and write it back), `7` save it,
  `8` save and exit, `9` exit without saving.

The store is kept as JSON in `PATH`, by default `Types&Ammo.dat` in the
current directory. A file that cannot be read or written is reported on the
page and the program carries on. Input running out ends the program.

Limits: 25 gun types, 5 ammunition types per gun type, 20 charges per
ammunition type, 10 guns, 50 targets, names of at most 50 characters. Air
friction must be 0 or below. Ids shown on every page are counted from 1.

### What it does not do

The menu program does not compute fire missions. Directory commands `1`
(quick fire mission), `4` (fire mission) and `5` (guide) end the program, as
those pages do not exist. The ACE3 settings are stored but nothing uses them.
Firing solutions come only from `artycomp-ballistics`, which does not read the
store.

## Firing solutions

```
artycomp-ballistics [options]
```

Prints one firing solution per round: charge, time of flight, target
direction and elevation in mils, the range, and the distance left between the
point of fall and the target as a sanity check. Positions are given in units
of 100 m: the first three digits of each half of a grid reference, a point,
then the remaining digits.

Options (all have defaults):

- `--gun X Y ALT`, `--target X Y ALT`, `--second-target X Y ALT`
- `--charge N` and `--velocities V [V ...]`: muzzle velocity of each charge,
  counted from 0
- `--low-angle`: search downwards from 45 degrees instead of upwards
- `--multiple-targets` with `--rounds N`: spread N rounds evenly from the
  target to the second target
- `--air-friction`, `--range-adjustment`, `--lateral-adjustment`
- `--temperature` (degrees C), `--humidity` (0 to 1), `--pressure` (hPa)
- `--wind-direction` (degrees), `--wind-speed` (m/s)
- `--graph`: with a single round, also draw the trajectory as characters,
  one cell per 75 m

A round for which no elevation is found prints
`SIMULATION FAILED CHECK PARAMETERS!` and the exit status is 1; an undefined
charge prints an error and the exit status is 2.

## Using it as a library

Grids are strings of up to 10 digits; an odd count gets a leading zero, the
first half is the easting and the second the northing, scaled to metres.
`GridError` is raised for a grid that cannot be read.

```python
from artycomp.grid import grid_to_coordinates, grids_to_dis_mills

x, y = grid_to_coordinates("0360085455")
distance, direction = grids_to_dis_mills("0360085455", "1057087275")
```

`artycomp.grid` also has `dis_mills_to_coordinates` and
`mills_from_coordinate`.

The store is a `Storage` object; ids are counted from 1. An unknown id raises
`StorageError`, a full store `StorageFullError`.

```python
from artycomp.storage import Storage

store = Storage()
store.add_type("M119")
store.add_ammo(1, "HE", -0.00006)
store.add_charge(1, 1, 100.0, 3000)
store.add_gun("0936085455", 163, 1)
store.add_target("1057087275", 103)
store.save("storage.json")

same = Storage.load("storage.json")
```

Firing solutions come from `artycomp.ballistics`: fill in a `Problem` (with
its `Weather`) and call `solve` for the first target or `solve_all` for every
round. Each returns `FiringSolution` objects carrying the simulated `Flight`;
`format_solution` renders one as the command prints it and
`trajectory_chart` draws a tracked flight. A failed search raises
`SimulationFailed`.

```python
from artycomp.ballistics import Problem, solve, format_solution

print(format_solution(solve(Problem())))
```