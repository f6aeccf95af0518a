"""SeedFuzz: mutation-based black-box fuzzing over a target's standard input."""

__version__ = "0.1.0"
