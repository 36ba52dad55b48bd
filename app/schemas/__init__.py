from .user import UserCreate, UserLogin, UserOut
from .task import TaskCreate, TaskUpdate, TaskOut, ActionResult, TaskEnvelope
from .pagination import PaginationMeta, PaginatedTasks
