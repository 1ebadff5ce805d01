from taskboard.models.board import Board
from taskboard.models.comment import TaskComment
from taskboard.models.member import ProjectMember
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.user import User

__all__ = ["User", "Project", "ProjectMember", "Board", "Task", "TaskComment"]
