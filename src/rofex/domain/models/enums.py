"""Enumerations of the Primary API vocabulary"""

from enum import Enum


class Environment(str, Enum):
    """Target environment"""

    REMARKET = "remarket"
    LIVE = "live"


class Market(str, Enum):
    """Market identifier"""

    ROFEX = "ROFX"
    MERV = "MERV"


class MarketSegment(str, Enum):
    """Market segment associated to instruments"""

    DDF = "DDF"
    DDA = "DDA"
    DUAL = "DUAL"
    U_DDF = "U-DDF"
    U_DDA = "U-DDA"
    U_DUAL = "U-DUAL"
    MERV = "MERV"


class CFICode(str, Enum):
    """Instrument type codes"""

    STOCK = "ESXXXX"
    BOND = "DBXXXX"
    CALL_STOCK = "OCASPS"
    PUT_STOCK = "OPASPS"
    FUTURE = "FXXXSX"
    PUT_FUTURE = "OPAFXS"
    CALL_FUTURE = "OCAFXS"
    CEDEAR = "EMXXXX"
    ON = "DBXXFR"


class TimeInForce(str, Enum):
    """How long an order stays active

    GTD orders require an expire date.
    """

    DAY = "DAY"
    IOC = "IOC"
    FOK = "FOK"
    GTD = "GTD"


class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    MARKET_TO_LIMIT = "MARKET_TO_LIMIT"


class MDEntry(str, Enum):
    """Market data entries that can be requested for an instrument

    BI and OF carry a list of book levels when depth > 1.
    """

    BIDS = "BI"
    OFFERS = "OF"
    LAST = "LA"
    OPENING_PRICE = "OP"
    CLOSING_PRICE = "CL"
    SETTLEMENT_PRICE = "SE"
    HIGH_PRICE = "HI"
    LOW_PRICE = "LO"
    TRADE_VOLUME = "TV"
    OPEN_INTEREST = "OI"
    INDEX_VALUE = "IV"
    TRADE_EFFECTIVE_VOLUME = "EV"
    NOMINAL_VOLUME = "NV"
    AUCTION_PRICE = "ACP"
    TRADE_COUNT = "TC"


class WSMessageType(str, Enum):
    """WebSocket message discriminant

    Client to server: smd, os, no, co. Server to client: md, or.
    """

    SUBSCRIBE_MARKET_DATA = "smd"
    ORDER_SUBSCRIPTION = "os"
    NEW_ORDER = "no"
    CANCEL_ORDER = "co"
    MARKET_DATA = "md"
    ORDER_REPORT = "or"


class CandleResolution(str, Enum):
    M1 = "1"
    M5 = "5"
    M15 = "15"
    M30 = "30"
    H1 = "1h"
    H4 = "4h"
    D1 = "D"
    W1 = "W"
    MN1 = "M"
    MN3 = "3M"
