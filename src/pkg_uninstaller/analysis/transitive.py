"""
Transitive justification for dependencies with no direct reference.

A dependency that no source file imports may still be needed: another
installed dependency can list it as a peer, or it can share requirements
with what the project declares. The checks run in a fixed order and stop at
the first success.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .manifest import ManifestGraph

logger = logging.getLogger(__name__)


class JustificationRule(Enum):
    PEER = "peer"
    TRANSITIVE = "transitive"
    PEER_CHAIN = "peer_chain"


@dataclass(frozen=True)
class Justification:
    """Why a dependency without direct references is still kept."""

    dependency: str
    rule: JustificationRule
    via: Tuple[str, ...]

    def describe(self) -> str:
        if self.rule is JustificationRule.PEER:
            return f"{self.dependency} is a peer dependency of {self.via[0]}."
        if self.rule is JustificationRule.TRANSITIVE:
            return f"{self.dependency} is transitively required by {self.via[0]}."
        return f"{self.dependency} is indirectly required by {self.via[0]} via {self.via[1]}."


class TransitiveResolver:
    """
    Searches the manifest graph for a reason to keep a dependency.

    Args:
        declared: Every dependency the root project declares, all sections merged
        graph: Manifest lookup shared by all checks of one run
        verbose: Report justifications at INFO instead of DEBUG
        log: Diagnostic sink
    """

    def __init__(self, declared: Dict[str, str], graph: ManifestGraph,
                 verbose: bool = False, log: Optional[logging.Logger] = None):
        self.declared = declared
        self.graph = graph
        self.verbose = verbose
        self.log = log or logger

    def resolve(self, dependency: str) -> Optional[Justification]:
        """Return the first justification found for ``dependency``, or None."""
        justification = (
            self.check_peer(dependency)
            or self.check_transitive(dependency)
            or self.check_peer_chain(dependency)
        )
        if justification is not None:
            level = logging.INFO if self.verbose else logging.DEBUG
            self.log.log(level, "[Info] %s", justification.describe())
        return justification

    def is_justified(self, dependency: str) -> bool:
        return self.resolve(dependency) is not None

    def check_peer(self, dependency: str) -> Optional[Justification]:
        """Some other declared dependency lists ``dependency`` as a peer."""
        for installed in self.declared:
            if installed == dependency:
                continue
            if dependency in self.graph.peer_dependencies(installed):
                return Justification(dependency, JustificationRule.PEER, (installed,))
        return None

    def check_transitive(self, dependency: str) -> Optional[Justification]:
        """
        ``dependency`` itself requires something the root also declares.

        This looks at what the dependency needs, not at who needs it.
        """
        for required in self.graph.requirements(dependency):
            if required in self.declared:
                return Justification(dependency, JustificationRule.TRANSITIVE, (required,))
        return None

    def check_peer_chain(self, dependency: str) -> Optional[Justification]:
        """A peer-of relationship P -> dependency whose own peers are declared at the root."""
        for installed in self.declared:
            if dependency not in self.graph.peer_dependencies(installed):
                continue
            for deeper in self.graph.peer_dependencies(dependency):
                if deeper in self.declared:
                    return Justification(dependency, JustificationRule.PEER_CHAIN, (installed, deeper))
        return None
