"""Process-wide runtime context.

A single read-mostly object, ``c8ctl``, gives command handlers and plugins
access to environment facts, the loaded session and factories for clients
and loggers. Plugins import it rather than re-implementing configuration
resolution:

    from c8ctl.runtime import c8ctl

    async def hello(args):
        async with c8ctl.create_client() as client:
            ...

The session is loaded once at startup. It changes only through
c8ctl.config.session.save_session_state(), which publishes the saved state
back here via replace_session().
"""

import platform
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from c8ctl.config.models import OutputMode, SessionState
from c8ctl.version import __version__

if TYPE_CHECKING:
    from c8ctl.cli.output import OutputLogger
    from c8ctl.client import OrchestrationClient


@dataclass(frozen=True)
class RuntimeEnv:
    """Facts about the running process."""

    version: str
    python_version: str
    platform: str
    arch: str
    cwd: Path
    root_dir: Path

    @classmethod
    def detect(cls) -> "RuntimeEnv":
        return cls(
            version=__version__,
            python_version=platform.python_version(),
            platform=sys.platform,
            arch=platform.machine(),
            cwd=Path.cwd(),
            root_dir=Path(__file__).resolve().parent,
        )


@dataclass
class C8ctlRuntime:
    """Ambient context shared by built-in commands and plugins."""

    env: RuntimeEnv = field(default_factory=RuntimeEnv.detect)
    _session: Optional[SessionState] = field(default=None, repr=False)

    @property
    def session(self) -> SessionState:
        """The loaded session, read from disk on first access."""
        if self._session is None:
            return self.load_session()
        return self._session

    @property
    def active_profile(self) -> Optional[str]:
        return self.session.active_profile

    @property
    def active_tenant(self) -> Optional[str]:
        return self.session.active_tenant

    @property
    def output_mode(self) -> OutputMode:
        return self.session.output_mode

    def load_session(self) -> SessionState:
        from c8ctl.config.session import load_session_state

        self._session = load_session_state()
        return self._session

    def replace_session(self, state: SessionState) -> None:
        self._session = state

    def reset(self) -> None:
        """Forget the loaded session and re-detect the environment."""
        self._session = None
        self.env = RuntimeEnv.detect()

    def create_client(
        self, profile: Optional[str] = None, **options: Any
    ) -> "OrchestrationClient":
        """Create a cluster client for the given or active profile."""
        from c8ctl.client import create_client

        return create_client(profile, **options)

    def resolve_tenant(self, profile: Optional[str] = None) -> str:
        from c8ctl.config.resolver import resolve_tenant_id

        return resolve_tenant_id(profile, session=self.session)

    def get_logger(self) -> "OutputLogger":
        """Return an output logger bound to the current output mode."""
        from c8ctl.cli.output import OutputLogger

        return OutputLogger(self.output_mode)


c8ctl = C8ctlRuntime()
