# app/utils/permissions.py
from app.models.task import Task
from app.models.user import User


class AccessPolicy:
    """Self-or-admin decisions for task access.

    The caller is always the user resolved from the session, never an id
    taken from the request body or query string.
    """

    @staticmethod
    def is_admin(user: User) -> bool:
        return user.is_admin

    @staticmethod
    def can_view_user_tasks(user: User, target_user_id: int) -> bool:
        """A user may list their own tasks; admins may list anyone's"""
        return user.id == target_user_id or user.is_admin

    @staticmethod
    def can_modify_task(user: User, task: Task) -> bool:
        """Only the task owner or an admin may update or delete a task"""
        return task.user_id == user.id or user.is_admin
