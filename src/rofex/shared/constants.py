"""Primary API endpoints and client defaults."""

REMARKET_BASE_URL = "https://api.remarkets.primary.com.ar/"
REMARKET_WS_URL = "wss://api.remarkets.primary.com.ar/"
REMARKET_PROPRIETARY = "PBCP"
LIVE_PROPRIETARY = "api"

USER_AGENT = "rofex-client/0.1.0"
AUTH_HEADER = "X-Auth-Token"

DEFAULT_TIMEOUT = 15.0
DEFAULT_WS_BUFFER = 128

# REST paths, relative to the base URL
PATH_AUTH = "auth/getToken"
PATH_SEGMENTS = "rest/segment/all"
PATH_INSTRUMENTS_ALL = "rest/instruments/all"
PATH_INSTRUMENTS_DETAILS = "rest/instruments/details"
PATH_INSTRUMENT_DETAIL = "rest/instruments/detail?symbol={symbol}&marketId={market}"
PATH_INSTRUMENTS_BY_CFI = "rest/instruments/byCFICode?CFICode={code}"
PATH_INSTRUMENTS_BY_SEGMENT = (
    "rest/instruments/bySegment?MarketSegmentID={segment}&MarketID={market}"
)
PATH_MARKET_DATA = (
    "rest/marketdata/get?marketId={market}&symbol={symbol}"
    "&entries={entries}&depth={depth}"
)
PATH_TRADES = (
    "rest/data/getTrades?marketId={market}&symbol={symbol}"
    "&dateFrom={date_from}&dateTo={date_to}"
)
PATH_NEW_ORDER = (
    "rest/order/newSingleOrder?marketId={market}&symbol={symbol}"
    "&orderQty={qty}&ordType={ord_type}&side={side}&timeInForce={tif}"
    "&account={account}&cancelPrevious={cancel_previous}"
)
PATH_CANCEL_ORDER = "rest/order/cancelById?clOrdId={cl_ord_id}&proprietary={proprietary}"
PATH_REPLACE_ORDER = "rest/order/replaceById?clOrdId={cl_ord_id}&proprietary={proprietary}"
PATH_ORDER_STATUS = "rest/order/id?clOrdId={cl_ord_id}&proprietary={proprietary}"
PATH_ORDER_HISTORY = "rest/order/allById?clOrdId={cl_ord_id}&proprietary={proprietary}"
PATH_ORDER_BY_ORDER_ID = "rest/order/byOrderId?orderId={order_id}"
PATH_ORDER_BY_EXEC_ID = "rest/order/byExecId?execId={exec_id}"
PATH_FILLED_ORDERS = "rest/order/filleds?accountId={account}"
PATH_ACTIVE_ORDERS = "rest/order/actives?accountId={account}"
PATH_ALL_ORDERS = "rest/order/all?accountId={account}"
PATH_ACCOUNTS = "rest/accounts"
PATH_ACCOUNT_POSITION = "rest/risk/position/getPositions/{account}"
PATH_DETAILED_POSITION = "rest/risk/detailedPosition/{account}"
PATH_ACCOUNT_REPORT = "rest/risk/accountReport/{account}"
