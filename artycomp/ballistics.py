"""Firing solutions for indirect fire, found by simulating the shell's flight."""

import argparse
import math
from dataclasses import dataclass, field

GRAVITY = 9.8
INCREMENT = 0.01
SEA_LEVEL_PRESSURE = 1013.25
STANDARD_DENSITY = 1.225
LAPSE_RATE = 0.0065
MILS_PER_CIRCLE = 6400
MAX_SIMULATED_DISTANCE = 50000
MAX_ITERATIONS = 2000
TOLERANCE = 0.5

# (upper bound of the range error in metres, elevation step in degrees)
_HIGH_ANGLE_STEPS = ((5, 0.0005), (100, 0.025), (250, 0.05), (1000, 0.75))
_LOW_ANGLE_STEPS = ((5, 0.0005), (100, 0.025), (250, 0.1), (1000, 0.75))
_LARGEST_STEP = 1.0

FAILURE_MESSAGE = "\n\n\t\tSIMULATION FAILED CHECK PARAMETERS!\n\n"


class SimulationFailed(RuntimeError):
    """Raised when no elevation brings the shell onto the target."""


@dataclass
class Weather:
    """Conditions at the gun: temperature in degrees C, relative humidity 0..1, pressure in hPa."""

    temperature: float = 18.7
    humidity: float = 0.615
    pressure: float = 990.6


@dataclass
class Flight:
    """The outcome of one simulated shot; points are (distance, altitude) pairs when tracked."""

    time: float
    distance: float
    altitude: float
    max_altitude: float
    drift: float
    points: list = field(default_factory=list)


@dataclass
class FiringSolution:
    """Direction and elevation that put a round on a target."""

    number: int
    high_angle: bool
    charge: int
    time: float
    direction: float
    elevation: float
    distance: float
    range: float
    range_adjustment: float
    lateral_adjustment: float
    flight: Flight

    @property
    def direction_mils(self):
        return self.direction * MILS_PER_CIRCLE / (2 * math.pi)

    @property
    def elevation_mils(self):
        return self.elevation * MILS_PER_CIRCLE / (2 * math.pi)


@dataclass
class Problem:
    """Everything needed to compute firing solutions.

    Positions are in units of 100 m: the first three digits of a grid
    reference, a point, then the remaining digits.
    """

    gun_x: float = 93.6
    gun_y: float = 854.55
    gun_alt: float = 163
    charge: int = 2
    high_angle: bool = True
    multiple_targets: bool = False
    rounds: int = 4
    air_friction: float = -0.00006
    graph: bool = False
    target_x: float = 105.7
    target_y: float = 872.75
    target_alt: float = 103
    target2_x: float = 97.025
    target2_y: float = 959.4 - 1000
    target2_alt: float = 32
    range_adjustment: float = 0
    lateral_adjustment: float = 0
    weather: Weather = field(default_factory=Weather)
    wind_direction: float = 0
    wind_speed: float = 0.7
    charge_velocities: tuple = (100, 137.5, 190)

    @property
    def muzzle_velocity(self):
        if not 0 <= self.charge < len(self.charge_velocities):
            raise ValueError(f"charge {self.charge} not defined")
        return self.charge_velocities[self.charge]


def _round_half_away(value):
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def air_density(temperature, pressure, humidity):
    """Return the air density for a temperature in degrees C, pressure in hPa and humidity 0..1."""
    pressure = pressure * 100
    kelvin = temperature + 273.15
    if humidity > 0:
        saturation = 610.78 * 10 ** ((7.5 * temperature) / (temperature + 237.3))
        vapour = humidity * saturation
        dry = pressure - vapour
        return (dry * 0.028964 + vapour * 0.018016) / (8.314 * kelvin)
    return pressure / (8.314 * kelvin)


def target_direction(gun_x, gun_y, target_x, target_y):
    """Return the bearing from gun to target in radians, clockwise from north."""
    north = gun_y < target_y
    south = gun_y > target_y
    east = gun_x < target_x
    west = gun_x > target_x

    if north or south:
        distance = math.hypot(gun_x - target_x, gun_y - target_y) * 100
        dif_x = abs(gun_x - target_x) * 100
        direction = math.acos(min(1.0, dif_x / distance))
        if direction < math.pi / 2 and direction != 0:
            if north and west:
                return 3 * math.pi / 2 + direction
            if south and west:
                return 3 * math.pi / 2 - direction
            if south and east:
                return direction + math.pi / 2
            if north and east:
                return math.pi / 2 - direction
            return direction
        if north and direction != 0:
            return 0.0
        return math.pi
    if east:
        return math.pi / 2
    return 3 * math.pi / 2


def simulate_flight(velocity, elevation, gun_alt, target_alt, air_friction, weather,
                    wind_x=0.0, wind_y=0.0, track=False):
    """Fly a shell until it falls below the target altitude on its way down."""
    kelvin = weather.temperature + 273.15
    overpressure = (SEA_LEVEL_PRESSURE - weather.pressure) / (
        10 * (1 - (LAPSE_RATE * gun_alt) / kelvin)
    )

    speed = velocity
    altitude = gun_alt
    max_altitude = gun_alt
    distance = 0.0
    drift = 0.0
    time = 0.0
    angle = elevation
    points = []

    while True:
        climb = abs(altitude - gun_alt)
        density = air_density(
            weather.temperature - LAPSE_RATE * climb,
            SEA_LEVEL_PRESSURE - 10 * overpressure * (1 - (LAPSE_RATE * altitude) / kelvin),
            weather.humidity,
        ) / STANDARD_DENSITY
        drag = air_friction * density * speed

        sin_a = math.sin(angle)
        cos_a = math.cos(angle)
        x_accel = cos_a * speed * drag
        z_accel = -abs(sin_a * speed * drag)

        x_velocity = cos_a * speed + x_accel * INCREMENT
        z_velocity = sin_a * speed + z_accel * INCREMENT - GRAVITY * INCREMENT
        altitude += z_velocity * INCREMENT
        distance += x_velocity * INCREMENT + wind_x * INCREMENT
        drift += wind_y * INCREMENT
        speed = math.hypot(x_velocity, z_velocity)
        if x_velocity == 0:
            angle = math.copysign(math.pi / 2, z_velocity)
        else:
            angle = math.atan(z_velocity / x_velocity)
        time += INCREMENT

        max_altitude = max(max_altitude, altitude)
        if track:
            points.append((distance, altitude))

        if z_velocity < 0 and altitude < target_alt:
            return Flight(time, distance, altitude, max_altitude, drift, points)


def _elevation_step(range_error, high_angle):
    steps = _HIGH_ANGLE_STEPS if high_angle else _LOW_ANGLE_STEPS
    degrees = next((step for bound, step in steps if range_error < bound), _LARGEST_STEP)
    radians = degrees * math.pi / 180
    return radians if high_angle else -radians


def _target_positions(problem):
    if not problem.multiple_targets or problem.rounds <= 1:
        rounds = 1 if not problem.multiple_targets else max(problem.rounds, 1)
        yield from ((problem.target_x, problem.target_y) for _ in range(rounds))
        return
    x_step = (problem.target2_x - problem.target_x) / (problem.rounds - 1)
    y_step = (problem.target2_y - problem.target_y) / (problem.rounds - 1)
    for shot in range(problem.rounds):
        yield problem.target_x + shot * x_step, problem.target_y + shot * y_step


def _solve_at(problem, number, target_x, target_y):
    velocity = problem.muzzle_velocity
    base_range = math.hypot(problem.gun_x - target_x, problem.gun_y - target_y) * 100
    if base_range == 0:
        raise SimulationFailed("target is at the gun position")

    direction = target_direction(problem.gun_x, problem.gun_y, target_x, target_y)
    range_ = math.hypot(problem.lateral_adjustment, base_range + problem.range_adjustment)
    if range_ == 0:
        raise SimulationFailed("adjusted range is zero")
    direction += math.asin(problem.lateral_adjustment / range_)

    wind_offset = math.radians(problem.wind_direction) - direction
    wind_y = math.sin(wind_offset) * problem.wind_speed
    wind_x = math.cos(wind_offset) * problem.wind_speed

    elevation = math.radians(45)
    iterations = 0
    while True:
        flight = simulate_flight(
            velocity, elevation, problem.gun_alt, problem.target_alt,
            problem.air_friction, problem.weather, wind_x, wind_y, problem.graph,
        )
        if (
            flight.distance > MAX_SIMULATED_DISTANCE
            or flight.distance < 0
            or iterations == MAX_ITERATIONS
            or elevation < 0
            or elevation > math.pi / 2
        ):
            raise SimulationFailed("simulation failed, check parameters")
        iterations += 1
        error = abs(range_ - flight.distance)
        elevation += _elevation_step(error, problem.high_angle)
        if error < TOLERANCE:
            break

    return FiringSolution(
        number=number,
        high_angle=problem.high_angle,
        charge=problem.charge,
        time=flight.time,
        direction=direction,
        elevation=elevation,
        distance=flight.distance,
        range=range_,
        range_adjustment=problem.range_adjustment,
        lateral_adjustment=problem.lateral_adjustment,
        flight=flight,
    )


def solve(problem):
    """Return the firing solution for the first target of a problem."""
    return _solve_at(problem, 1, problem.target_x, problem.target_y)


def solve_all(problem):
    """Return the firing solutions for every round of a problem."""
    return [
        _solve_at(problem, number, x, y)
        for number, (x, y) in enumerate(_target_positions(problem), start=1)
    ]


def trajectory_chart(flight, cell=75):
    """Draw a tracked flight as rows of characters, one cell per `cell` metres."""
    heights = {}
    for distance, altitude in flight.points:
        heights[_round_half_away(distance / cell)] = max(0, _round_half_away(altitude / cell))

    top = _round_half_away(flight.max_altitude / cell) + 2
    columns = _round_half_away(flight.distance / cell) + 1
    lines = []
    for line in range(top, -1, -1):
        row = "".join("O " if heights.get(column) == line else "' " for column in range(columns))
        label = " ALTITUDE:" if line == top else f" {line * cell} m"
        lines.append(row + label)
    return "\n".join(lines) + "\n"


def format_solution(solution):
    """Render a firing solution as the computer prints it."""
    angle = "High Angle" if solution.high_angle else "Low Angle"
    return (
        f"Firing Solution {solution.number}:\n"
        f"{angle},\n"
        f"Charge: {solution.charge},\n"
        f"ToF: {solution.time:.2f} s,\n"
        f"TgtDir: {solution.direction_mils:.0f} mills,\n"
        f"Elevation: {solution.elevation_mils:.0f} mills,\n"
        f"Distance - Range: {solution.distance - solution.range:.2f} m, "
        "(Sanity check: if not within +/- 0.5 m then check parameters)\n"
        f"Range: {solution.range:.2f} m,\n"
        f"Range Adjustment: {solution.range_adjustment:.0f} m,\n"
        f"Lateral Adjustment: {solution.lateral_adjustment:.0f} m\n\n"
    )


def _parser():
    defaults = Problem()
    weather = defaults.weather
    parser = argparse.ArgumentParser(description="Compute artillery firing solutions.")
    parser.add_argument("--gun", nargs=3, type=float, metavar=("X", "Y", "ALT"),
                        default=(defaults.gun_x, defaults.gun_y, defaults.gun_alt))
    parser.add_argument("--target", nargs=3, type=float, metavar=("X", "Y", "ALT"),
                        default=(defaults.target_x, defaults.target_y, defaults.target_alt))
    parser.add_argument("--second-target", nargs=3, type=float, metavar=("X", "Y", "ALT"),
                        default=(defaults.target2_x, defaults.target2_y, defaults.target2_alt))
    parser.add_argument("--charge", type=int, default=defaults.charge)
    parser.add_argument("--velocities", nargs="+", type=float,
                        default=list(defaults.charge_velocities))
    parser.add_argument("--low-angle", action="store_true")
    parser.add_argument("--multiple-targets", action="store_true")
    parser.add_argument("--rounds", type=int, default=defaults.rounds)
    parser.add_argument("--air-friction", type=float, default=defaults.air_friction)
    parser.add_argument("--range-adjustment", type=float, default=defaults.range_adjustment)
    parser.add_argument("--lateral-adjustment", type=float, default=defaults.lateral_adjustment)
    parser.add_argument("--temperature", type=float, default=weather.temperature)
    parser.add_argument("--humidity", type=float, default=weather.humidity)
    parser.add_argument("--pressure", type=float, default=weather.pressure)
    parser.add_argument("--wind-direction", type=float, default=defaults.wind_direction)
    parser.add_argument("--wind-speed", type=float, default=defaults.wind_speed)
    parser.add_argument("--graph", action="store_true")
    return parser


def main(argv=None):
    """Print firing solutions for the problem described on the command line."""
    args = _parser().parse_args(argv)
    problem = Problem(
        gun_x=args.gun[0], gun_y=args.gun[1], gun_alt=args.gun[2],
        target_x=args.target[0], target_y=args.target[1], target_alt=args.target[2],
        target2_x=args.second_target[0], target2_y=args.second_target[1],
        target2_alt=args.second_target[2],
        charge=args.charge,
        charge_velocities=tuple(args.velocities),
        high_angle=not args.low_angle,
        multiple_targets=args.multiple_targets,
        rounds=args.rounds,
        air_friction=args.air_friction,
        range_adjustment=args.range_adjustment,
        lateral_adjustment=args.lateral_adjustment,
        weather=Weather(args.temperature, args.humidity, args.pressure),
        wind_direction=args.wind_direction,
        wind_speed=args.wind_speed,
        graph=args.graph,
    )

    positions = list(_target_positions(problem))
    status = 0
    for number, (x, y) in enumerate(positions, start=1):
        try:
            solution = _solve_at(problem, number, x, y)
        except SimulationFailed:
            print(FAILURE_MESSAGE, end="")
            status = 1
            continue
        except ValueError as error:
            print(f"ERROR: {error}")
            return 2
        print(format_solution(solution), end="")
        if problem.graph and len(positions) == 1:
            print(trajectory_chart(solution.flight), end="")
    return status


if __name__ == "__main__":
    raise SystemExit(main())