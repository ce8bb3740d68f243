import logging
from time import monotonic
from types import MappingProxyType
from typing import Dict, Mapping, Optional
from urllib.parse import quote, urlencode
from xml.etree import ElementTree as ET

import httpx

from ..errors import MalformedResponseError
from ..metrics import BALLOU_NOTIFY_LATENCY_SECONDS, record_outcome
from .base import BaseGateway, HttpMethod, NormalizedResponse, RawHttpResult

logger = logging.getLogger(__name__)

PARAM_KEYS = ("UN", "PW", "CR", "RI", "O", "D", "LONGSMS")
ENCODED_KEYS = frozenset({"O", "M"})
FALSY_FLAGS = frozenset({"", "0", "false", "no"})

RESPONSE_ROOT = "ballou_smls_response"
MESSAGE_PATH = "response/message"

SENT_MESSAGE = "Message sent"


def is_truthy_flag(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() not in FALSY_FLAGS


class BallouGateway(BaseGateway):
    name = "ballou"

    endpoint = "https://sms.ballou.se"
    send_path = "/http/get/SendSms.php"

    # Per-operation limits; deadline_seconds bounds the call as a whole
    timeout = httpx.Timeout(80.0, connect=30.0)
    deadline_seconds = 80.0
    method = HttpMethod.GET

    def __init__(self, client: httpx.Client, config: Mapping[str, str]):
        self.client = client
        self.config = MappingProxyType(dict(config))

    def get_request_url(self) -> str:
        return self.endpoint

    def build_url(self, path: str) -> str:
        return self.get_request_url().rstrip('/') + '/' + path.lstrip('/')

    def build_params(self, message: str, options: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Build the SendSms parameters for one call.

        Keys come out in the order the endpoint documents. A key present in
        ``options`` wins over the static configuration, even when empty.
        """
        options = options or {}
        params: Dict[str, str] = {}
        for key in PARAM_KEYS:
            if key in options:
                value = options[key]
            else:
                value = self.config.get(key, '')
            params[key] = '' if value is None else str(value)
        params['M'] = message

        for key in ENCODED_KEYS:
            params[key] = quote(params[key], safe='')
        return params

    def notify(self, message: str, options: Optional[Mapping[str, str]] = None) -> NormalizedResponse:
        params = self.build_params(message, options)
        logger.info(
            "Sending SMS through Ballou.",
            extra={"provider": self.name, "destination": params['D'], "longsms": params['LONGSMS']},
        )
        return self.commit(params)

    def commit(self, params: Mapping[str, str]) -> NormalizedResponse:
        url = self.build_url(self.send_path)
        headers = {
            'Content-Type': 'application/x-www-form-urlencoded',
            'Accept': 'application/xml',
        }

        try:
            with BALLOU_NOTIFY_LATENCY_SECONDS.time():
                deadline = monotonic() + self.deadline_seconds
                with self.client.stream(
                    self.method.value,
                    url,
                    content=urlencode(params).encode(),
                    headers=headers,
                    timeout=self.timeout,
                ) as response:
                    body = self.read_body(response, deadline)
        except httpx.RequestError as exc:
            error = f"API Request failed. ({type(exc).__name__}: {exc})"
            logger.warning(error, extra={"provider": self.name})
            record_outcome("transport_failure")
            return self.map_response(False, RawHttpResult(status_code=None, error=error))

        if response.status_code != 200:
            raw = self.response_error(response, body)
            logger.warning(
                "Ballou returned a non-200 status.",
                extra={"provider": self.name, "status_code": response.status_code},
            )
            record_outcome("transport_failure")
            return self.map_response(False, raw)

        document = self.parse_xml(body)
        message_node = self.find_message_node(document, body)
        raw = RawHttpResult(status_code=response.status_code, body=body, xml=document)
        success = is_truthy_flag(message_node.get('status'))
        record_outcome("sent" if success else "provider_rejection")
        return self.map_response(success, raw, message_node)

    def read_body(self, response: httpx.Response, deadline: float) -> bytes:
        """Read the whole body, giving up once the overall deadline has passed."""
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if monotonic() > deadline:
                raise httpx.ReadTimeout(
                    f"Request exceeded the {self.deadline_seconds:g}s deadline",
                    request=response.request,
                )
        return b''.join(chunks)

    def map_response(
        self,
        success: bool,
        raw: RawHttpResult,
        message_node: Optional[ET.Element] = None,
    ) -> NormalizedResponse:
        if success:
            message = SENT_MESSAGE
        elif message_node is not None:
            errors = [(node.text or '').strip() for node in message_node.findall('error')]
            message = ', '.join(errors)
            logger.warning(
                "Ballou rejected the message.",
                extra={"provider": self.name, "status_code": raw.status_code, "errors": errors},
            )
        else:
            message = raw.error or ''
        return NormalizedResponse(success=success, message=message, raw=raw)

    def response_error(self, response: httpx.Response, body: bytes) -> RawHttpResult:
        msg = 'API Response not valid.'
        try:
            text = body.decode(response.charset_encoding or 'utf-8', errors='replace')
        except LookupError:
            text = body.decode('utf-8', errors='replace')
        msg += f" (Raw response API {text})"
        return RawHttpResult(status_code=response.status_code, body=body, error=msg)

    def parse_xml(self, body: bytes) -> ET.Element:
        try:
            return ET.fromstring(body)
        except ET.ParseError as exc:
            logger.error(
                "Ballou returned a body that is not XML.",
                extra={"provider": self.name, "status_code": 200},
            )
            record_outcome("malformed")
            raise MalformedResponseError(f"Response body is not valid XML: {exc}", body) from exc

    def find_message_node(self, document: ET.Element, body: bytes) -> ET.Element:
        # The message node hangs off ballou_smls_response, which is either the root or its child
        if document.tag == RESPONSE_ROOT:
            node = document.find(MESSAGE_PATH)
        else:
            node = document.find(f"{RESPONSE_ROOT}/{MESSAGE_PATH}")
        if node is None:
            logger.error(
                "Ballou response has no message node.",
                extra={"provider": self.name, "status_code": 200},
            )
            record_outcome("malformed")
            raise MalformedResponseError(f"Response XML has no {RESPONSE_ROOT}/{MESSAGE_PATH} node", body)
        return node
