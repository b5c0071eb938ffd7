"""
Uncaught fault handling.

- fault_classifier: signature-gated suppress/escalate decision
- supervisor: installs the classifier as the last-resort handler
- tls_policy: session handling rules injected into networking code
"""

from crashguard.guard.fault_classifier import FaultClassifier, Verdict
from crashguard.guard.supervisor import Supervisor
from crashguard.guard.tls_policy import TLSSessionPolicy

__all__ = ["FaultClassifier", "Supervisor", "TLSSessionPolicy", "Verdict"]
