# HTTP transport and batch execution
from .client import HttpClient, HttpRequest, HttpResponse
from .batch_pool import BatchPool, BatchResult, FailureInfo
from . import status
