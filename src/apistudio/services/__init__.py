"""Service layer for business logic."""

from apistudio.services.codegen import CodeTarget, emit
from apistudio.services.executor import ExecutionService, RequestInFlightError
from apistudio.services.formatter import FormatterService
from apistudio.services.interpolation import interpolate
from apistudio.services.materializer import materialize
from apistudio.services.resolver import InvalidUrlError

__all__ = [
    "CodeTarget",
    "ExecutionService",
    "FormatterService",
    "InvalidUrlError",
    "RequestInFlightError",
    "emit",
    "interpolate",
    "materialize",
]
