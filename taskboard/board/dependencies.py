from starlette.requests import Request

from taskboard.board.services import DepartmentRegistry, TaskBoard


def get_department_registry(request: Request) -> DepartmentRegistry:
    return request.app.state.department_registry


def get_task_board(request: Request) -> TaskBoard:
    return request.app.state.task_board
