"""HTTP status codes the storage API answers with."""

from http import HTTPStatus

HTTP_OK = HTTPStatus.OK.value
HTTP_CREATED = HTTPStatus.CREATED.value
HTTP_NO_CONTENT = HTTPStatus.NO_CONTENT.value
HTTP_FORBIDDEN = HTTPStatus.FORBIDDEN.value
HTTP_NOT_FOUND = HTTPStatus.NOT_FOUND.value
HTTP_UNPROCESSABLE_ENTITY = HTTPStatus.UNPROCESSABLE_ENTITY.value
