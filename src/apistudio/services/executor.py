"""Execution service: materialize, send, and report a single outcome."""

from collections.abc import Sequence

from apistudio.models.environments import EnvironmentVariable
from apistudio.models.output import debug_log
from apistudio.models.requests import ApiRequest
from apistudio.models.responses import ExecutionResult
from apistudio.repositories.http import HttpExecutor, RequestExecutionError
from apistudio.services.materializer import materialize
from apistudio.services.resolver import InvalidUrlError


class RequestInFlightError(RuntimeError):
    """Raised when a send is attempted while another one is outstanding."""


class ExecutionService:
    """Runs one request at a time against an HttpExecutor."""

    def __init__(self, executor: HttpExecutor, debug: bool = False):
        self.executor = executor
        self.debug = debug
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def send(
        self,
        request: ApiRequest,
        variables: Sequence[EnvironmentVariable] = (),
    ) -> ExecutionResult:
        """Materialize and execute a request.

        Args:
            request: The request to send
            variables: Variables of the active environment

        Returns:
            A result holding either the response or an error message

        Raises:
            RequestInFlightError: If a previous send has not finished
        """
        if self._busy:
            raise RequestInFlightError("A request is already in flight")

        self._busy = True
        try:
            materialized = materialize(request, variables)
            debug_log(
                f"send: {request.name} -> {len(materialized.headers)} header(s), "
                f"body={'yes' if materialized.body is not None else 'no'}",
                self.debug,
            )
            response = await self.executor.execute(materialized)
        except (InvalidUrlError, RequestExecutionError) as e:
            return ExecutionResult(error=str(e))
        finally:
            self._busy = False

        return ExecutionResult(response=response)
