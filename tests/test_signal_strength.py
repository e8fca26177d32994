"""
Signal strength checksum tests.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from crtsim.instructions import parse_program
from crtsim.machine import VirtualMachine
from crtsim.signal_strength import (
    DEFAULT_SAMPLE_CYCLES, sample_signal_strengths, total_signal_strength,
)

EXAMPLE_PATH = os.path.join(os.path.dirname(__file__), "..", "examples", "example_program.txt")


@pytest.fixture
def example_program():
    with open(EXAMPLE_PATH, encoding="utf-8") as f:
        return parse_program(f.read())


class TestSignalStrength:
    def test_example_total(self, example_program):
        assert total_signal_strength(example_program) == 13140

    def test_example_samples(self, example_program):
        strengths = sample_signal_strengths(VirtualMachine(example_program))
        assert strengths == {
            20: 420, 60: 1140, 100: 1800, 140: 2940, 180: 2880, 220: 3960,
        }

    def test_default_cycles(self):
        assert DEFAULT_SAMPLE_CYCLES == (20, 60, 100, 140, 180, 220)

    def test_custom_cycles(self):
        program = parse_program("noop\naddx 3\naddx -5")
        strengths = sample_signal_strengths(VirtualMachine(program), cycles=[3, 4, 5])
        assert strengths == {3: 3, 4: 16, 5: 20}

    def test_unreached_cycles_are_absent(self):
        program = parse_program("noop\naddx 3\naddx -5")
        assert sample_signal_strengths(VirtualMachine(program)) == {}
        assert total_signal_strength(program) == 0

    def test_machine_runs_to_completion(self):
        machine = VirtualMachine(parse_program("addx 1\naddx 1"))
        sample_signal_strengths(machine, cycles=[1])
        assert not machine.is_executing()
        assert machine.read_register() == 3
