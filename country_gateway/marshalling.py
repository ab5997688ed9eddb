# marshalling.py
"""XML binding between the country records and the producing service schema.

One ``Marshaller`` maps a single namespace onto its root record classes and
is used both ways: ``marshal`` renders a record through the zeep element
declared for it, ``unmarshal`` reads an element back into the record bound
to its tag. Reading is strict: every child must be present and well typed,
where zeep's own parser would hand back ``None``.
Child elements are namespace-qualified, as in the WSDL contract.
"""
import dataclasses
import re
from enum import Enum

from lxml import etree
from zeep import xsd
from zeep.exceptions import Error as ZeepError

from .errors import MarshallingError
from .models import TNS, CountryRequest, CountryResponse

# xsd:int lexical space, ASCII digits only
XSD_INT = re.compile(r"[+-]?[0-9]+")


def _q(name):
    return etree.QName(TNS, name)


# ------------------------
# Schema (getCountryRequest / getCountryResponse)
# ------------------------
COUNTRY = xsd.ComplexType(xsd.Sequence([
    xsd.Element(_q("name"), xsd.String()),
    xsd.Element(_q("population"), xsd.Int()),
    xsd.Element(_q("capital"), xsd.String()),
    xsd.Element(_q("currency"), xsd.String()),
]))

GET_COUNTRY_REQUEST = xsd.Element(_q("getCountryRequest"), xsd.ComplexType(xsd.Sequence([
    xsd.Element(_q("name"), xsd.String()),
])))

GET_COUNTRY_RESPONSE = xsd.Element(_q("getCountryResponse"), xsd.ComplexType(xsd.Sequence([
    xsd.Element(_q("country"), COUNTRY),
])))


class Marshaller:
    def __init__(self, namespace, roots, prefix="gs"):
        self.namespace = namespace
        self.prefix = prefix
        self._element_by_class = dict(roots)
        self._class_by_tag = {element.qname.text: cls for cls, element in roots.items()}

    def _qname(self, local_name):
        return etree.QName(self.namespace, local_name).text

    def supports(self, cls):
        return cls in self._element_by_class

    # ------------------------
    # object -> XML
    # ------------------------
    def marshal(self, obj):
        cls = type(obj)
        if not self.supports(cls):
            raise MarshallingError(f"{cls.__name__} is not bound to {self.namespace}")
        element = self._element_by_class[cls]
        container = etree.Element("container", nsmap={self.prefix: self.namespace})
        try:
            element.render(container, element(**_as_value(obj)))
        except (ValueError, ZeepError) as e:
            raise MarshallingError(f"Cannot write {cls.__name__}: {e}") from e
        return container[0]

    # ------------------------
    # XML -> object
    # ------------------------
    def unmarshal(self, element):
        cls = self._class_by_tag.get(element.tag)
        if cls is None:
            raise MarshallingError(f"Unexpected element {element.tag}")
        return self._read_fields(element, cls)

    def _read_fields(self, element, cls):
        values = {}
        for field in dataclasses.fields(cls):
            child = element.find(self._qname(field.name))
            if child is None:
                raise MarshallingError(
                    f"Missing element {field.name!r} in {etree.QName(element).localname}")
            values[field.name] = self._read_value(child, field.type)
        try:
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise MarshallingError(f"Invalid {cls.__name__}: {e}") from e

    def _read_value(self, element, type_):
        if dataclasses.is_dataclass(type_):
            return self._read_fields(element, type_)
        text = (element.text or "").strip()
        if type_ is int:
            if not XSD_INT.fullmatch(text):
                raise MarshallingError(
                    f"Invalid value {text!r} for {etree.QName(element).localname}")
            return int(text)
        if issubclass(type_, Enum):
            try:
                return type_(text)
            except ValueError as e:
                raise MarshallingError(
                    f"Invalid value {text!r} for {etree.QName(element).localname}") from e
        return element.text or ""


def _as_value(obj):
    values = {}
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)
        if dataclasses.is_dataclass(value):
            value = _as_value(value)
        elif isinstance(value, Enum):
            value = value.value
        values[field.name] = value
    return values


def create_marshaller():
    """The shared marshaller/unmarshaller for the country service namespace."""
    return Marshaller(TNS, {
        CountryRequest: GET_COUNTRY_REQUEST,
        CountryResponse: GET_COUNTRY_RESPONSE,
    })
