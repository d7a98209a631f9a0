"""Role-based page access.

Every page declares the roles allowed to view it. A single evaluation decides,
for the current actor, whether the page renders, renders in restricted form
(employer awaiting approval), or redirects: anonymous actors go to sign-in,
actors with the wrong role go to their own dashboard.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Role(str, Enum):
    ANONYMOUS = "anonymous"
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


class Outcome(str, Enum):
    LOADING = "loading"
    ALLOWED = "allowed"
    ALLOWED_RESTRICTED = "allowed_restricted"
    DENIED_ANONYMOUS = "denied_anonymous"
    DENIED_WRONG_ROLE = "denied_wrong_role"


HOME_ROUTE = "/"
SIGN_IN_ROUTE = "/auth"
DASHBOARD_ROUTES = {
    Role.ADMIN: "/admin",
    Role.EMPLOYER: "/employer",
    Role.JOB_SEEKER: "/dashboard",
}


@dataclass(frozen=True)
class Actor:
    id: str | None = None
    role: Role = Role.ANONYMOUS
    is_employer_approved: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.id is None or self.role == Role.ANONYMOUS


ANONYMOUS = Actor()


@dataclass(frozen=True)
class Page:
    name: str
    path: str
    allowed_roles: frozenset[Role] = frozenset()


PAGES = {
    page.name: page
    for page in (
        Page("home", "/"),
        Page("jobs", "/jobs"),
        Page("job_details", "/jobs/{id}"),
        Page("auth", SIGN_IN_ROUTE),
        Page("dashboard", "/dashboard", frozenset({Role.JOB_SEEKER})),
        Page("employer", "/employer", frozenset({Role.EMPLOYER})),
        Page("applicants", "/employer/applicants/{job_id}", frozenset({Role.EMPLOYER})),
        Page("admin", "/admin", frozenset({Role.ADMIN})),
    )
}


@dataclass(frozen=True)
class GateDecision:
    outcome: Outcome
    redirect_to: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome in (Outcome.ALLOWED, Outcome.ALLOWED_RESTRICTED)


def dashboard_route(role: Role | str | None) -> str:
    try:
        return DASHBOARD_ROUTES.get(Role(role), HOME_ROUTE)
    except ValueError:
        return HOME_ROUTE


def evaluate(
    actor: Actor | None,
    allowed_roles: Iterable[Role | str] = (),
    resolved: bool = True,
) -> GateDecision:
    """Decide what the actor sees on a page admitting ``allowed_roles``.

    An empty role set marks a public page. ``resolved=False`` means the
    session lookup has not finished yet, which is reported as LOADING rather
    than a denial.
    """
    if not resolved:
        return GateDecision(Outcome.LOADING)

    roles = {Role(r) for r in allowed_roles}
    if not roles:
        return GateDecision(Outcome.ALLOWED)

    if actor is None or actor.is_anonymous:
        return GateDecision(Outcome.DENIED_ANONYMOUS, SIGN_IN_ROUTE)

    if actor.role not in roles:
        return GateDecision(Outcome.DENIED_WRONG_ROLE, dashboard_route(actor.role))

    # Unapproved employers may reach their pages but only see the pending notice.
    if actor.role == Role.EMPLOYER and not actor.is_employer_approved:
        return GateDecision(Outcome.ALLOWED_RESTRICTED)

    return GateDecision(Outcome.ALLOWED)


def evaluate_page(page_name: str, actor: Actor | None, resolved: bool = True) -> GateDecision:
    page = PAGES[page_name]
    return evaluate(actor, page.allowed_roles, resolved=resolved)
