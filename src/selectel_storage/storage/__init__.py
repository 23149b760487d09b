# Storage data model
from .interface import ServerResource
from .container import Container
from .file import File
from .symlink import SymLink
