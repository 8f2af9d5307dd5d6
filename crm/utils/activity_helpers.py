from sqlalchemy.ext.asyncio import AsyncSession

from crm.models.support.activity_models import UserActivity
from crm.models.users.user_models import User
from crm.constants.activity_templates import ACTIVITY_TEMPLATES
from crm.constants.activity_codes import ActivityCode


def emit_activity(
    db: AsyncSession,
    actor: User,
    code: ActivityCode,
    **context,
) -> UserActivity:
    """Stage an audit row for ``actor``; the caller's commit persists it.

    ``actor_role`` and ``actor_email`` are filled from the actor, the rest of
    the template placeholders come from ``context``.
    """
    template = ACTIVITY_TEMPLATES.get(code)
    if not template:
        raise ValueError(f"No activity template for code {code}")

    context.setdefault("actor_role", actor.role.capitalize())
    context.setdefault("actor_email", actor.username)

    try:
        message = template.format(**context)
    except KeyError as e:
        raise ValueError(f"Missing activity context key: {e.args[0]} for {code}")

    activity = UserActivity(
        user_id=actor.id,
        username_snapshot=actor.username,
        message=message,
    )
    db.add(activity)
    return activity
