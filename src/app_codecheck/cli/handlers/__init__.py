from .check import handle_check
from .checks import handle_list_checks
