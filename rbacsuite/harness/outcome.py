"""
Outcome of a single operation and classification of kubectl failures into it.

kubectl reports server-side failures as `Error from server (<Reason>): <message>`.
Mapping used for classification:

* exit status 0                                          -> ALLOWED
* `admission webhook "<name>" denied the request`        -> DENIED (regardless of reason)
* reason `Forbidden`                                     -> DENIED, except messages listed in NON_AUTHZ_FORBIDDEN
* reason `Forbidden` because the admin client `cannot impersonate` -> AMBIGUOUS, the principal was never evaluated
* anything else (NotFound, Conflict, AlreadyExists, Invalid, Unauthorized,
  InternalError, timeouts, transport faults, unparseable output) -> AMBIGUOUS
"""

import enum
import re
from dataclasses import dataclass

SERVER_ERROR = re.compile(r"Error from server(?: \((?P<reason>[A-Za-z]+)\))?: (?P<message>.*)")
WEBHOOK_DENIAL = re.compile(r'admission webhook "(?P<webhook>[^"]+)" denied the request')

# Rejections which share 403 status with authorization but are caused by cluster state
NON_AUTHZ_FORBIDDEN = (
    "exceeded quota",
    "because it is being terminated",
)

# Admin client lacks the impersonate verb, request never reached authorization of the principal
IMPERSONATION_REFUSED = "cannot impersonate"

TRANSPORT_MARKERS = (
    "Unable to connect to the server",
    "connection refused",
    "connection reset by peer",
    "i/o timeout",
    "TLS handshake timeout",
    "no such host",
    "net/http: request canceled",
)


class Decision(enum.Enum):
    """Result of an operation as seen by the authorization layer"""

    ALLOWED = "Allowed"
    DENIED = "Denied"
    AMBIGUOUS = "Ambiguous"

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Outcome:
    """Classified result of one operation"""

    decision: Decision
    reason: str = None
    detail: str = ""

    @classmethod
    def allowed(cls, detail: str = "") -> "Outcome":
        """Operation succeeded"""
        return cls(Decision.ALLOWED, None, detail)

    @classmethod
    def denied(cls, reason: str, detail: str) -> "Outcome":
        """Operation was rejected by RBAC or an admission webhook"""
        return cls(Decision.DENIED, reason, detail)

    @classmethod
    def ambiguous(cls, reason: str, detail: str) -> "Outcome":
        """Operation failed for a reason which can't be attributed to authorization"""
        return cls(Decision.AMBIGUOUS, reason, detail)

    def __str__(self):
        if self.reason:
            return f"{self.decision} ({self.reason})"
        return str(self.decision)


def classify_error(stderr: str) -> Outcome:
    """Classifies output of a failed kubectl command"""
    detail = (stderr or "").strip()
    if not detail:
        return Outcome.ambiguous("Unknown", "command failed without any error output")

    if WEBHOOK_DENIAL.search(detail):
        return Outcome.denied("Webhook", detail)

    match = SERVER_ERROR.search(detail)
    if match:
        reason = match.group("reason") or "Unknown"
        if reason == "Forbidden":
            if IMPERSONATION_REFUSED in detail:
                return Outcome.ambiguous("Impersonation", detail)
            if any(marker in detail for marker in NON_AUTHZ_FORBIDDEN):
                return Outcome.ambiguous(reason, detail)
            return Outcome.denied(reason, detail)
        return Outcome.ambiguous(reason, detail)

    if any(marker in detail for marker in TRANSPORT_MARKERS):
        return Outcome.ambiguous("Transport", detail)
    if "(Unauthorized)" in detail:
        return Outcome.ambiguous("Unauthorized", detail)
    return Outcome.ambiguous("Unknown", detail)
