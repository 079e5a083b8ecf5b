"""
Route authorization policy.

The policy is an ordered table of rules. A request is matched against the
rules top to bottom; the first rule whose method and path pattern match
decides which roles may call the route. Requests that match no rule fall
back to ``DEFAULT_RULE`` (any authenticated caller).
"""
import enum
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from delivery_api.models.enums import UserRole

_PLACEHOLDER = re.compile(r"\{[^/{}]+\}")

ANY_METHOD = "*"

AUTHENTICATED = frozenset({UserRole.CUSTOMER, UserRole.OWNER, UserRole.MANAGER, UserRole.MASTER})
ORDER_STAFF = frozenset({UserRole.OWNER, UserRole.MANAGER, UserRole.MASTER})


class Decision(str, enum.Enum):
    ALLOW = "ALLOW"
    DENY = "DENY"


def _normalize(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path.rstrip("/") or "/"
    return path


def _compile(pattern: str) -> re.Pattern:
    parts = _PLACEHOLDER.split(_normalize(pattern))
    regex = "[^/]+".join(re.escape(part) for part in parts)
    return re.compile(f"^{regex}$")


@dataclass(frozen=True)
class Rule:
    """
    One row of the policy table.

    ``roles`` of ``None`` marks a public route: no token needed, no role
    check. ``{name}`` placeholders in ``pattern`` match one path segment.
    """
    method: str
    pattern: str
    roles: Optional[frozenset[UserRole]] = None
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "_regex", _compile(self.pattern))

    @property
    def is_public(self) -> bool:
        return self.roles is None

    def matches(self, method: str, path: str) -> bool:
        if self.method != ANY_METHOD and self.method != method.upper():
            return False
        return self._regex.match(_normalize(path)) is not None

    def permits(self, roles: Iterable[UserRole]) -> bool:
        if self.is_public:
            return True
        return any(role in self.roles for role in roles)


def public(method: str, pattern: str) -> Rule:
    return Rule(method, pattern, None)


def require(method: str, pattern: str, *roles: UserRole) -> Rule:
    return Rule(method, pattern, frozenset(roles))


DEFAULT_RULE = Rule(ANY_METHOD, "*", AUTHENTICATED)

ROUTE_RULES: tuple[Rule, ...] = (
    # Users
    public("POST", "/api/user/signup"),
    public("POST", "/api/user/login"),
    public("POST", "/api/user/refresh"),
    public("GET", "/api/user/{username}"),
    public("PUT", "/api/user/{username}"),
    public("PATCH", "/api/user/{username}"),

    # Orders
    require("POST", "/api/order", UserRole.CUSTOMER),
    Rule("GET", "/api/order", ORDER_STAFF),
    Rule("GET", "/api/order/{orderId}", AUTHENTICATED),
    Rule("PATCH", "/api/order/{orderId}", AUTHENTICATED),

    # Reviews
    Rule("POST", "/api/review", AUTHENTICATED),
    public("GET", "/api/review"),
    public("GET", "/api/review/{reviewId}"),
    Rule("PATCH", "/api/review/{reviewId}", AUTHENTICATED),

    # Payments
    require("POST", "/api/payment/{orderId}", UserRole.CUSTOMER),
    Rule("GET", "/api/payment/{paymentId}", AUTHENTICATED),
    Rule("GET", "/api/payment", AUTHENTICATED),
    Rule("PATCH", "/api/payment/{paymentId}", AUTHENTICATED),

    # Catalog reads
    public("GET", "/api/menus/item/{menuId}"),
    public("GET", "/api/menus/{restaurantId}"),
    public("GET", "/api/menus"),
    public("GET", "/api/category"),
    public("GET", "/api/restaurants/{restaurantId}"),
    public("GET", "/api/restaurants"),
    public("GET", "/api/restaurants/category/{categoryId}"),

    # Operational
    public("GET", "/"),
    public("GET", "/health"),
    public("GET", "/api/health"),
    public("GET", "/docs"),
    public("GET", "/docs/oauth2-redirect"),
    public("GET", "/redoc"),
    public("GET", "/openapi.json"),
)


class AuthorizationPolicy:
    """Evaluates requests against an ordered rule table."""

    def __init__(self, rules: Iterable[Rule] = ROUTE_RULES, default: Rule = DEFAULT_RULE):
        self.rules = tuple(rules)
        self.default = default

    def match(self, method: str, path: str) -> Rule:
        for rule in self.rules:
            if rule.matches(method, path):
                return rule
        return self.default

    def evaluate(self, method: str, path: str, roles: Iterable[UserRole]) -> Decision:
        rule = self.match(method, path)
        return Decision.ALLOW if rule.permits(roles) else Decision.DENY


default_policy = AuthorizationPolicy()
