"""XML-RPC endpoint for remote publishing clients."""

from __future__ import annotations

import logging
import xmlrpc.client
from dataclasses import dataclass, field
from typing import Any
from xml.parsers.expat import ExpatError

from django.http import HttpResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from dualmark.apps.content.signals import remote_session_finished, remote_session_started
from dualmark.logging import bind_log_context, reset_log_context

from . import methods

logger = logging.getLogger(__name__)

PARSE_ERROR_FAULT = -32700
METHOD_NOT_FOUND_FAULT = -32601


@dataclass
class RemoteSession:
    """One remote procedure request.

    ``state`` is scratch space for receivers of the remote session signals;
    it is discarded with the session.
    """

    raw_payload: bytes
    method: str = ""
    params: tuple = ()
    state: dict[str, Any] = field(default_factory=dict)


@method_decorator(csrf_exempt, name="dispatch")
class XmlRpcView(View):
    """
    Serves the blogging-API methods in ``methods``.

    Every request is a session: ``remote_session_started`` is sent before the
    payload is parsed, ``remote_session_finished`` once the response is built,
    whatever its outcome.
    """

    http_method_names = ["post"]

    def post(self, request):
        session = RemoteSession(raw_payload=request.body)
        remote_session_started.send(sender=RemoteSession, session=session)
        try:
            return self._dispatch_call(session)
        finally:
            remote_session_finished.send(sender=RemoteSession, session=session)

    def _dispatch_call(self, session: RemoteSession) -> HttpResponse:
        try:
            params, method = xmlrpc.client.loads(session.raw_payload)
        except (ExpatError, xmlrpc.client.Error, ValueError, TypeError):
            logger.info("remote_payload_invalid", extra={"size": len(session.raw_payload)})
            return self._fault(PARSE_ERROR_FAULT, "parse error. not well formed")

        session.method = method or ""
        session.params = params
        handler = methods.get_handler(session.method)
        if handler is None:
            logger.info("remote_method_unknown", extra={"rpc_method": session.method})
            return self._fault(METHOD_NOT_FOUND_FAULT, "server error. requested method not found")

        token = bind_log_context(rpc_method=session.method)
        try:
            result = handler(session)
        except xmlrpc.client.Fault as fault:
            logger.info(
                "remote_call_fault",
                extra={"fault_code": fault.faultCode, "fault_string": fault.faultString},
            )
            return self._respond(xmlrpc.client.dumps(fault))
        finally:
            reset_log_context(token)

        return self._respond(xmlrpc.client.dumps((result,), methodresponse=True))

    def _fault(self, code: int, message: str) -> HttpResponse:
        return self._respond(xmlrpc.client.dumps(xmlrpc.client.Fault(code, message)))

    @staticmethod
    def _respond(body: str) -> HttpResponse:
        return HttpResponse(body, content_type="text/xml; charset=utf-8")
