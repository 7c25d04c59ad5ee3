from __future__ import annotations
import importlib
from typing import Callable, Dict, List, Tuple
from .capability_base import Capability

# Members every flow log capability has to provide before the server
# hands it a CapabilityContext.
_REQUIRED_MEMBERS = ("name", "register_tools", "status")


class CapabilityLoadError(ValueError):
    """A capability import string could not be turned into a capability."""


def _split_import_path(path: str) -> Tuple[str, str]:
    module_path, sep, factory_name = path.partition(":")
    if not sep or not module_path or not factory_name or ":" in factory_name:
        raise CapabilityLoadError(
            f"bad capability import string {path!r}, expected 'package.module:factory'"
        )
    return module_path, factory_name


class CapabilityRegistry:
    """
    Flow log format capabilities, keyed by capability name.

    Capabilities come in as "package.module:factory" strings, for example
    "flowlog_tagger.capabilities.vpc_flow_log.capability:build_capability".
    The factory is called with no arguments and must return an object with
    name, register_tools and status.
    """

    def __init__(self):
        self._caps: Dict[str, Capability] = {}

    def register(self, cap: Capability) -> None:
        if cap.name in self._caps:
            raise ValueError(f"duplicate capability name {cap.name}")
        self._caps[cap.name] = cap

    def get(self, name: str) -> Capability:
        try:
            return self._caps[name]
        except KeyError:
            raise KeyError(f"capability not loaded {name}") from None

    def list(self) -> List[str]:
        return sorted(self._caps)

    def statuses(self) -> Dict[str, Dict]:
        return {name: self._caps[name].status() for name in self.list()}

    def load(self, path: str) -> Capability:
        """
        Import one capability factory, build it and register the result.
        """
        module_path, factory_name = _split_import_path(path)
        module = importlib.import_module(module_path)

        factory: Callable[[], Capability] = getattr(module, factory_name, None)
        if not callable(factory):
            raise CapabilityLoadError(f"{path!r}: {module_path} has no factory {factory_name}")

        cap = factory()
        missing = [m for m in _REQUIRED_MEMBERS if not hasattr(cap, m)]
        if missing:
            raise CapabilityLoadError(
                f"{path!r}: {type(cap).__name__} is not a capability, missing {', '.join(missing)}"
            )

        self.register(cap)
        return cap

    def load_from_import_paths(self, import_paths: List[str]) -> None:
        for path in import_paths:
            self.load(path)
