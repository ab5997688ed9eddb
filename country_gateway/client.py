# client.py (SOAP client adapter)
import logging

import requests
from lxml import etree
from lxml.builder import ElementMaker
from zeep import Transport, ns
from zeep.exceptions import Error as ZeepError
from zeep.exceptions import Fault
from zeep.loader import parse_xml
from zeep.wsdl.bindings.soap import Soap11Binding, Soap12Binding

from .errors import MarshallingError, RemoteFaultError, TransportError
from .models import CountryRequest, CountryResponse

logger = logging.getLogger(__name__)

SOAP_ENVELOPES = {"1.1": ns.SOAP_ENV_11, "1.2": ns.SOAP_ENV_12}


class CountryClient:
    """Sends getCountryRequest to the SOAP endpoint and unmarshals the reply.

    Holds only static configuration, so one instance can serve every request.
    Requests go out as SOAP 1.1 unless ``soap_version="1.2"``; faults are
    read in either version, whichever the service answers with.
    """

    def __init__(self, endpoint_url, soap_action, marshaller, unmarshaller=None,
                 timeout=10.0, transport=None, soap_version="1.1"):
        if soap_version not in SOAP_ENVELOPES:
            raise ValueError(f"Unsupported SOAP version {soap_version!r}")
        self.endpoint_url = endpoint_url
        self.soap_action = soap_action
        self.soap_version = soap_version
        self.marshaller = marshaller
        self.unmarshaller = unmarshaller or marshaller
        self.transport = transport or Transport(timeout=timeout, operation_timeout=timeout)
        # Only used for their fault parsing, no WSDL behind them
        self._bindings = {
            ns.SOAP_ENV_11: Soap11Binding(None, None, None, self.transport, "document"),
            ns.SOAP_ENV_12: Soap12Binding(None, None, None, self.transport, "document"),
        }

    @classmethod
    def from_settings(cls, settings, marshaller):
        return cls(
            settings.soap_endpoint_url,
            settings.soap_action,
            marshaller,
            marshaller,
            timeout=settings.soap_timeout,
            soap_version=settings.soap_version,
        )

    def get_country(self, country):
        request = CountryRequest(name=country)
        logger.info("Requested country: %s", country)
        response = self.marshal_send_and_receive(request)
        if not isinstance(response, CountryResponse):
            raise MarshallingError(
                f"Expected getCountryResponse, got {type(response).__name__}")
        return response

    def marshal_send_and_receive(self, payload):
        envelope = self._envelope(self.marshaller.marshal(payload))
        try:
            response = self.transport.post_xml(self.endpoint_url, envelope, self._headers())
        except requests.exceptions.RequestException as e:
            logger.warning("SOAP call to %s failed: %s", self.endpoint_url, e)
            raise TransportError(f"Could not reach {self.endpoint_url}: {e}") from e

        doc, body = self._body(response)
        if body.find(f"{{{etree.QName(doc).namespace}}}Fault") is not None:
            self._raise_fault(doc)
        if response.status_code != 200:
            raise TransportError(f"HTTP {response.status_code} from {self.endpoint_url}")

        payload_elt = next(iter(body.iterchildren(tag=etree.Element)), None)
        if payload_elt is None:
            raise MarshallingError("SOAP Body is empty")
        return self.unmarshaller.unmarshal(payload_elt)

    # ------------------------
    # Envelope helpers
    # ------------------------
    def _headers(self):
        if self.soap_version == "1.2":
            return {
                "Content-Type": f'application/soap+xml; charset=utf-8; action="{self.soap_action}"',
            }
        return {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{self.soap_action}"',
        }

    def _envelope(self, payload_elt):
        env_ns = SOAP_ENVELOPES[self.soap_version]
        soap = ElementMaker(namespace=env_ns, nsmap={"soap-env": env_ns})
        return soap.Envelope(soap.Header(), soap.Body(payload_elt))

    def _body(self, response):
        try:
            doc = parse_xml(response.content, self.transport)
        except ZeepError as e:
            if response.status_code != 200:
                raise TransportError(
                    f"HTTP {response.status_code} from {self.endpoint_url}") from e
            raise MarshallingError(f"Invalid XML in SOAP response: {e}") from e

        qname = etree.QName(doc)
        if qname.localname != "Envelope" or qname.namespace not in self._bindings:
            if response.status_code != 200:
                raise TransportError(
                    f"HTTP {response.status_code} from {self.endpoint_url}")
            raise MarshallingError(f"Expected a SOAP Envelope, got {doc.tag}")
        body = doc.find(f"{{{qname.namespace}}}Body")
        if body is None:
            raise MarshallingError("SOAP Envelope has no Body")
        return doc, body

    def _raise_fault(self, doc):
        binding = self._bindings[etree.QName(doc).namespace]
        try:
            binding.process_error(doc, None)
        except Fault as fault:
            logger.warning("SOAP fault %s: %s", fault.code, fault.message)
            raise RemoteFaultError(
                fault.message or "SOAP Fault",
                code=fault.code,
                actor=fault.actor,
                detail=fault.detail,
                subcodes=fault.subcodes,
            ) from fault
