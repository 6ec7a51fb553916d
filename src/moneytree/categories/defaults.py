"""Categories created for every new user, and the system root attributes."""

from moneytree.categories.kinds import RootKind

SYSTEM_ROOTS: dict[RootKind, dict[str, str]] = {
    RootKind.INCOME: {"color": "#22c55e", "icon": "trending-up"},
    RootKind.EXPENSE: {"color": "#ef4444", "icon": "trending-down"},
}

DEFAULT_CATEGORIES: dict[RootKind, list[dict[str, str]]] = {
    RootKind.INCOME: [
        {"name": "Salary", "color": "#22c55e", "icon": "briefcase"},
        {"name": "Freelance", "color": "#22c55e", "icon": "briefcase"},
        {"name": "Investments", "color": "#22c55e", "icon": "briefcase"},
    ],
    RootKind.EXPENSE: [
        {"name": "Food", "color": "#f97316", "icon": "utensils"},
        {"name": "Transport", "color": "#3b82f6", "icon": "car"},
        {"name": "Housing", "color": "#8b5cf6", "icon": "home"},
        {"name": "Healthcare", "color": "#ef4444", "icon": "heart-pulse"},
        {"name": "Entertainment", "color": "#ec4899", "icon": "gamepad-2"},
    ],
}
