"""
Tests for the loguru setup helpers.
"""

from loguru import logger

from flowvars.utils.logging import setup_logging, disable_logging, enable_logging
from flowvars.variables.collection import VariableSet
from flowvars.variables.factory import create_point_variables


class TestLogging:

    def test_setup_returns_logger(self):
        assert setup_logging(level="DEBUG", show_time=False) is logger
        setup_logging()

    def test_custom_sink(self, nondim):
        messages = []
        setup_logging(level="DEBUG", show_time=False, sink=messages.append)
        enable_logging()
        try:
            create_point_variables("navier_stokes", 2, nondim)
        finally:
            disable_logging()
            setup_logging()
        assert any("navier_stokes" in m and "DEBUG" in m for m in messages)

    def test_warning_for_non_realizable_points(self, nondim):
        messages = []
        enable_logging()
        sink = logger.add(messages.append, level="WARNING", format="{message}")
        try:
            field = VariableSet([create_point_variables("euler", 2, nondim) for _ in range(3)])
            field[1].flow.state.set_solution(-1.0, var=3)
            field.recompute_primitives()
        finally:
            logger.remove(sink)
            disable_logging()
        assert len(messages) == 1
        assert "1 of 3 points" in messages[0]

    def test_disabled_logging_is_silent(self, nondim):
        messages = []
        disable_logging()
        sink = logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            create_point_variables("euler", 2, nondim)
        finally:
            logger.remove(sink)
        assert messages == []
