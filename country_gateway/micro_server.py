# micro_server.py (stand-in for the producing SOAP service)
from wsgiref.simple_server import make_server
from spyne import Application, rpc, ServiceBase, Unicode, Integer, ComplexModel
from spyne.error import ResourceNotFoundError
from spyne.protocol.soap import Soap11
from spyne.server.wsgi import WsgiApplication

from .models import TNS

# ------------------------
# Types
# ------------------------
CurrencyCode = Unicode(values=["GBP", "EUR", "PLN"], type_name="currency")

class Country(ComplexModel):
    __namespace__ = TNS
    __type_name__ = "country"

    name = Unicode
    population = Integer
    capital = Unicode
    currency = CurrencyCode

# ------------------------
# In-memory "repository"
# ------------------------
COUNTRIES = {
    "Spain": {"name": "Spain", "population": 46704314, "capital": "Madrid", "currency": "EUR"},
    "Poland": {"name": "Poland", "population": 38186860, "capital": "Warsaw", "currency": "PLN"},
    "United Kingdom": {"name": "United Kingdom", "population": 63705000, "capital": "London", "currency": "GBP"},
}

class CountryService(ServiceBase):
    @rpc(Unicode, _returns=Country,
         _in_message_name="getCountryRequest",
         _out_message_name="getCountryResponse",
         _out_variable_name="country")
    def getCountry(ctx, name):
        c = COUNTRIES.get(name or "")
        if not c:
            raise ResourceNotFoundError(name)
        return Country(**c)

country_app = Application(
    [CountryService],
    tns=TNS,
    in_protocol=Soap11(validator="lxml"),
    out_protocol=Soap11(),
)

def create_wsgi_app():
    return WsgiApplication(country_app)

if __name__ == "__main__":
    # Served under /ws to match the gateway's default SOAP_ENDPOINT_URL
    from werkzeug.middleware.dispatcher import DispatcherMiddleware
    from werkzeug.exceptions import NotFound

    server = make_server("0.0.0.0", 8080, DispatcherMiddleware(NotFound(), {"/ws": create_wsgi_app()}))
    print("Country SOAP server on http://localhost:8080/ws  (WSDL at ?wsdl)")
    server.serve_forever()
