"""Built-in onboarding plans used when no templates are stored.

Days 1, 6 and 7 are the same for everyone. Days 2-5 depend on the
department, with a generic mid-week plan for departments not listed.
"""

from .models import TaskTemplate

# (title, duration, priority) per day; ids are derived as "<day>-<position>"
_Plan = dict[int, list[tuple[str, str, str]]]

GENERIC_DAYS: _Plan = {
    1: [
        ("Complete HR paperwork & compliance forms", "1 hour", "high"),
        ("Get ID badge and building access", "30 min", "high"),
        ("Meet your team lead & buddy", "30 min", "medium"),
        ("Review employee handbook", "1 hour", "medium"),
    ],
    6: [
        ("Attend 1:1 with manager", "30 min", "high"),
        ("Document learnings so far", "1 hour", "medium"),
        ("Cross-team collaboration session", "1 hour", "medium"),
    ],
    7: [
        ("Present Week 1 summary to team", "30 min", "high"),
        ("Set goals for Week 2", "1 hour", "high"),
        ("Feedback session with manager", "30 min", "medium"),
    ],
}

DEPARTMENT_PLANS: dict[str, _Plan] = {
    "Engineering": {
        2: [
            ("Set up development environment & tools", "2 hours", "high"),
            ("Complete security & code-of-conduct training", "1 hour", "high"),
            ("Get access to code repositories", "30 min", "medium"),
        ],
        3: [
            ("Review codebase architecture docs", "2 hours", "high"),
            ("Attend team standup & sprint planning", "1 hour", "medium"),
            ("Shadow a senior engineer", "2 hours", "medium"),
        ],
        4: [
            ("Pick your first starter task / bug fix", "30 min", "high"),
            ("Set up local testing & CI pipeline", "1 hour", "high"),
            ("Read code review guidelines", "45 min", "medium"),
        ],
        5: [
            ("Complete and submit your first PR", "3 hours", "high"),
            ("Pair programming session", "1 hour", "medium"),
            ("Review deployment process", "30 min", "medium"),
        ],
    },
    "Product": {
        2: [
            ("Review product roadmap & strategy docs", "2 hours", "high"),
            ("Set up analytics & project management tools", "1 hour", "high"),
            ("Meet with key stakeholders", "1 hour", "medium"),
        ],
        3: [
            ("Analyze current product metrics", "2 hours", "high"),
            ("Review user research & feedback", "1 hour", "medium"),
            ("Shadow product team meeting", "1 hour", "medium"),
        ],
        4: [
            ("Draft your first feature spec", "2 hours", "high"),
            ("Learn the backlog grooming process", "1 hour", "medium"),
            ("Meet with engineering team lead", "30 min", "medium"),
        ],
        5: [
            ("Present feature spec for feedback", "1 hour", "high"),
            ("Conduct a competitive analysis", "2 hours", "medium"),
            ("Prioritize backlog items", "1 hour", "medium"),
        ],
    },
    "Design": {
        2: [
            ("Review design system & brand guidelines", "2 hours", "high"),
            ("Set up Figma / design tools", "1 hour", "high"),
            ("Meet with design team lead", "30 min", "medium"),
        ],
        3: [
            ("Audit existing UI patterns", "2 hours", "high"),
            ("Review current design projects", "1 hour", "medium"),
            ("Shadow a design critique session", "1 hour", "medium"),
        ],
        4: [
            ("Work on a starter design task", "3 hours", "high"),
            ("Learn the design handoff process", "1 hour", "medium"),
        ],
        5: [
            ("Present designs for feedback", "1 hour", "high"),
            ("Collaborate with engineering on implementation", "2 hours", "medium"),
        ],
    },
    "Marketing": {
        2: [
            ("Review marketing strategy & campaigns", "2 hours", "high"),
            ("Set up marketing tools & dashboards", "1 hour", "high"),
            ("Meet with content & growth teams", "1 hour", "medium"),
        ],
        3: [
            ("Analyze current campaign performance", "2 hours", "high"),
            ("Review brand voice guidelines", "1 hour", "medium"),
            ("Shadow a campaign planning session", "1 hour", "medium"),
        ],
        4: [
            ("Draft your first content piece", "2 hours", "high"),
            ("Learn the content approval workflow", "30 min", "medium"),
        ],
        5: [
            ("Submit content for review", "1 hour", "high"),
            ("Plan a small campaign or initiative", "2 hours", "medium"),
        ],
    },
    "Sales": {
        2: [
            ("Review sales playbook & CRM setup", "2 hours", "high"),
            ("Complete product knowledge training", "1 hour", "high"),
            ("Meet with sales manager", "30 min", "medium"),
        ],
        3: [
            ("Shadow sales calls", "3 hours", "high"),
            ("Review pipeline & key accounts", "1 hour", "medium"),
        ],
        4: [
            ("Make your first prospect outreach", "2 hours", "high"),
            ("Practice pitch & objection handling", "1 hour", "medium"),
        ],
        5: [
            ("Conduct first solo demo/call", "1 hour", "high"),
            ("Debrief with mentor", "30 min", "medium"),
        ],
    },
}

DEFAULT_MID_WEEK: _Plan = {
    2: [
        ("Complete department-specific training", "2 hours", "high"),
        ("Set up work tools & access", "1 hour", "high"),
        ("Review department documentation", "1 hour", "medium"),
    ],
    3: [
        ("Shadow a senior team member", "2 hours", "high"),
        ("Attend team meeting", "1 hour", "medium"),
        ("Review current projects", "1 hour", "medium"),
    ],
    4: [
        ("Take on your first small task", "2 hours", "high"),
        ("Learn team processes & workflows", "1 hour", "medium"),
    ],
    5: [
        ("Complete first deliverable", "3 hours", "high"),
        ("Get feedback from team lead", "30 min", "medium"),
    ],
}


def tasks_for(plan: _Plan, day: int) -> list[TaskTemplate] | None:
    """Materialize one day of a plan, or None if the plan has no such day."""
    entries = plan.get(day)
    if not entries:
        return None
    return [
        TaskTemplate(id=f"{day}-{i}", title=title, duration=duration, priority=priority)
        for i, (title, duration, priority) in enumerate(entries, 1)
    ]
