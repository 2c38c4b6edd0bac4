import math

import pytest

from artycomp.ballistics import (
    FiringSolution,
    Flight,
    Problem,
    SimulationFailed,
    Weather,
    air_density,
    format_solution,
    main,
    simulate_flight,
    solve,
    solve_all,
    target_direction,
    trajectory_chart,
)


def _short_problem(**overrides):
    values = dict(
        gun_x=0, gun_y=0, gun_alt=0,
        target_x=0, target_y=5, target_alt=0,
        charge=0, wind_speed=0,
    )
    values.update(overrides)
    return Problem(**values)


def test_air_density_humid_standard_conditions():
    assert air_density(15, 1013.25, 0.5) == pytest.approx(1.221, abs=0.002)


def test_air_density_zero_pressure_dry_is_zero():
    assert air_density(0, 0, 0) == 0.0


def test_air_density_falls_with_temperature_and_rises_with_pressure():
    assert air_density(30, 1000, 0.5) < air_density(0, 1000, 0.5)
    assert air_density(15, 900, 0.5) < air_density(15, 1000, 0.5)


@pytest.mark.parametrize(
    "target, expected",
    [
        ((0, 1), 0.0),
        ((1, 0), math.pi / 2),
        ((0, -1), math.pi),
        ((-1, 0), 3 * math.pi / 2),
        ((1, 1), math.pi / 4),
        ((1, -1), 3 * math.pi / 4),
        ((-1, -1), 5 * math.pi / 4),
        ((-1, 1), 7 * math.pi / 4),
    ],
)
def test_target_direction_bearings(target, expected):
    assert target_direction(0, 0, *target) == pytest.approx(expected)


def test_simulate_flight_without_drag_matches_vacuum_range():
    flight = simulate_flight(100, math.radians(45), 0, 0, 0.0, Weather())
    assert flight.distance == pytest.approx(100 ** 2 / 9.8, rel=0.02)
    assert flight.max_altitude >= flight.altitude
    assert flight.altitude < 0


def test_drag_shortens_flight():
    weather = Weather()
    vacuum = simulate_flight(100, math.radians(45), 0, 0, 0.0, weather)
    dragged = simulate_flight(100, math.radians(45), 0, 0, -0.0005, weather)
    assert dragged.distance < vacuum.distance


def test_simulate_flight_drift_follows_crosswind():
    flight = simulate_flight(100, math.radians(45), 0, 0, 0.0, Weather(), 0.0, 2.0)
    assert flight.drift == pytest.approx(2.0 * flight.time, rel=1e-6)


def test_tracked_flight_records_every_step():
    flight = simulate_flight(100, math.radians(45), 0, 0, 0.0, Weather(), track=True)
    assert len(flight.points) == round(flight.time / 0.01)
    assert flight.points[-1] == (flight.distance, flight.altitude)
    untracked = simulate_flight(100, math.radians(45), 0, 0, 0.0, Weather())
    assert untracked.points == []


def test_solve_high_angle_hits_target():
    solution = solve(_short_problem())
    assert solution.range == pytest.approx(500.0)
    assert abs(solution.distance - solution.range) < 0.5
    assert solution.elevation > math.radians(45)
    assert solution.direction == pytest.approx(0.0)
    assert solution.number == 1


def test_solve_low_angle_hits_target():
    solution = solve(_short_problem(high_angle=False))
    assert abs(solution.distance - solution.range) < 0.5
    assert solution.elevation < math.radians(45)
    assert solution.high_angle is False


def test_low_angle_flight_is_shorter_than_high_angle():
    high = solve(_short_problem())
    low = solve(_short_problem(high_angle=False))
    assert low.time < high.time


def test_range_adjustment_is_added():
    solution = solve(_short_problem(range_adjustment=20))
    assert solution.range == pytest.approx(520.0)
    assert abs(solution.distance - 520.0) < 0.5


def test_lateral_adjustment_turns_and_lengthens():
    solution = solve(_short_problem(lateral_adjustment=50))
    assert solution.range > 500.0
    assert solution.direction > 0
    assert abs(solution.distance - solution.range) < 0.5


def test_solve_all_single_target():
    solutions = solve_all(_short_problem())
    assert [s.number for s in solutions] == [1]


def test_solve_all_multiple_targets_spreads_rounds():
    problem = _short_problem(
        multiple_targets=True, rounds=3, target2_x=0, target2_y=7,
    )
    solutions = solve_all(problem)
    assert [s.number for s in solutions] == [1, 2, 3]
    ranges = [s.range for s in solutions]
    assert ranges == sorted(ranges)
    assert ranges[0] == pytest.approx(500.0)
    assert ranges[-1] == pytest.approx(700.0)
    assert all(abs(s.distance - s.range) < 0.5 for s in solutions)


def test_target_out_of_reach_fails():
    with pytest.raises(SimulationFailed):
        solve(_short_problem(target_y=50))


def test_target_on_gun_fails():
    with pytest.raises(SimulationFailed):
        solve(_short_problem(target_y=0))


def test_unknown_charge_is_rejected():
    with pytest.raises(ValueError):
        solve(_short_problem(charge=7))


def _flight():
    return Flight(time=1.0, distance=150.0, altitude=0.0, max_altitude=75.0, drift=0.0,
                  points=[(0.0, 0.0), (75.0, 75.0), (150.0, 0.0)])


def test_format_solution_layout():
    solution = FiringSolution(
        number=1, high_angle=True, charge=2, time=12.345, direction=math.pi,
        elevation=math.pi / 4, distance=1000.25, range=1000.0,
        range_adjustment=0, lateral_adjustment=0, flight=_flight(),
    )
    text = format_solution(solution)
    assert text.startswith("Firing Solution 1:\nHigh Angle,\nCharge: 2,\n")
    assert "ToF: 12.35 s,\n" in text or "ToF: 12.34 s,\n" in text
    assert "TgtDir: 3200 mills,\n" in text
    assert "Elevation: 800 mills,\n" in text
    assert "Distance - Range: 0.25 m," in text
    assert "Range: 1000.00 m,\n" in text
    assert text.endswith("Lateral Adjustment: 0 m\n\n")


def test_format_solution_low_angle():
    solution = FiringSolution(
        number=3, high_angle=False, charge=0, time=1.0, direction=0.0,
        elevation=0.1, distance=10.0, range=10.0,
        range_adjustment=5, lateral_adjustment=-2, flight=_flight(),
    )
    text = format_solution(solution)
    assert text.startswith("Firing Solution 3:\nLow Angle,\n")
    assert "Range Adjustment: 5 m,\n" in text
    assert "Lateral Adjustment: -2 m\n" in text


def test_trajectory_chart():
    expected = (
        "' ' '  ALTITUDE:\n"
        "' ' '  150 m\n"
        "' O '  75 m\n"
        "O ' O  0 m\n"
    )
    assert trajectory_chart(_flight(), 75) == expected


def test_main_prints_solution(capsys):
    status = main(["--gun", "0", "0", "0", "--target", "0", "5", "0",
                   "--charge", "0", "--wind-speed", "0"])
    out = capsys.readouterr().out
    assert status == 0
    assert out.startswith("Firing Solution 1:\nHigh Angle,\nCharge: 0,\n")


def test_main_reports_failure(capsys):
    status = main(["--gun", "0", "0", "0", "--target", "0", "50", "0",
                   "--charge", "0", "--wind-speed", "0"])
    out = capsys.readouterr().out
    assert status == 1
    assert "SIMULATION FAILED CHECK PARAMETERS!" in out