# models.py
from dataclasses import dataclass
from enum import Enum

# Namespace of the producing service's WSDL contract
TNS = "http://spring.io/guides/gs-producing-web-service"


class Currency(str, Enum):
    GBP = "GBP"
    EUR = "EUR"
    PLN = "PLN"


# ------------------------
# Types (getCountryRequest / getCountryResponse)
# ------------------------
@dataclass(frozen=True)
class CountryRequest:
    name: str


@dataclass(frozen=True)
class Country:
    name: str
    population: int
    capital: str
    currency: Currency

    def __post_init__(self):
        if self.population < 0:
            raise ValueError(f"population must be non-negative, got {self.population}")


@dataclass(frozen=True)
class CountryResponse:
    country: Country
