# auth.py
import os
from dataclasses import dataclass
from enum import Enum

from usermount.utils import debug, warning

KRB5_ENV = 'KRB5CCNAME'


class AuthState(Enum):
    UNSET = 'unset'
    ASKED = 'asked'


class AuthReply(Enum):
    """Answers a provider accepts for an authentication challenge."""
    HANDLED = 'handled'
    ABORTED = 'aborted'
    # ask again with different credentials
    UNHANDLED = 'unhandled'


@dataclass(frozen=True)
class AuthChallenge:
    message: str = ''
    default_user: str = ''
    default_domain: str = ''
    anonymous_supported: bool = False


def kerberos_ticket_available() -> bool:
    """Check whether a Kerberos credential cache is advertised in the environment."""
    return KRB5_ENV in os.environ


class AuthGate:
    """
    Answers the authentication challenges of a single mount operation.

    Nothing here ever waits for a human. Anonymous access is tried once, and
    credentialed access is only accepted when a Kerberos ticket cache is
    available for the provider to use.
    """

    def __init__(self, is_anonymous: bool = False):
        self.is_anonymous = is_anonymous
        self.state = AuthState.UNSET

    def __call__(self, challenge: AuthChallenge) -> AuthReply:
        if self.is_anonymous and challenge.anonymous_supported:
            # Only try anonymous access once.
            if self.state is AuthState.ASKED:
                warning("Anonymous access denied.")
                return AuthReply.ABORTED

            debug("Anonymous is supported by the provider.")
            self.state = AuthState.ASKED
            return AuthReply.HANDLED

        if kerberos_ticket_available():
            debug("Kerberos ticket found on the machine.")
            return AuthReply.HANDLED

        warning("Kerberos ticket not available on the machine.")
        return AuthReply.ABORTED
