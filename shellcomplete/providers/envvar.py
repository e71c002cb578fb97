"""Environment variable names."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import Candidate, ContextKind, EnvVar, ProviderSource
from .base import Provider

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping

    from ..models import Context

__all__ = ["EnvVarProvider"]


class EnvVarProvider(Provider):
    """Complete `$NAME` / `${NAME}` from the environment, case-sensitively."""

    name = "envvar"
    source = ProviderSource.ENV_VAR
    accepts = frozenset({ContextKind.ENV_VAR})

    def __init__(
        self,
        environment: Callable[[], Mapping[str, str]],
        shell_variables: Mapping[str, str] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            environment: Returns the process environment
            shell_variables: Shell-local variables, not exported to the environment
            log: Logger instance
        """
        super().__init__(log)
        self.environment = environment
        self.shell_variables = shell_variables if shell_variables is not None else {}

    def complete(self, context: Context) -> list[Candidate]:
        assert isinstance(context, EnvVar)
        try:
            names = set(self.environment())
        except OSError as e:
            self.log.debug("environment unavailable: %s", e)
            names = set()
        names.update(self.shell_variables)

        template = "${%s}" if context.braced else "$%s"
        return self._candidates(template % name for name in sorted(names) if name.startswith(context.fragment))
