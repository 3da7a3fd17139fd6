"""Randomized reference testing for lockstep."""

from .fuzz import FuzzResult, Fuzzer, FuzzRunner, random_list, random_value, run_suite

__all__ = ["FuzzResult", "Fuzzer", "FuzzRunner", "random_list", "random_value", "run_suite"]
