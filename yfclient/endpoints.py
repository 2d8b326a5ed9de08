"""Yahoo Finance endpoint constants.

Authentication endpoints are used by the crumb strategies in
``yfclient.auth``; the data endpoints are consumed by the higher-level
modules that send requests through the shared transport.
"""

# Base URLs
BASE_URL = "https://query2.finance.yahoo.com"
QUERY1_URL = "https://query1.finance.yahoo.com"
ROOT_URL = "https://finance.yahoo.com"

# Authentication
COOKIE_URL = "https://fc.yahoo.com"
CRUMB_URL = BASE_URL + "/v1/test/getcrumb"

# CSRF consent flow (fallback authentication)
CONSENT_URL = "https://guce.yahoo.com/consent"
COLLECT_CONSENT_URL = "https://consent.yahoo.com/v2/collectConsent"
COPY_CONSENT_URL = "https://guce.yahoo.com/copyConsent"
CRUMB_CSRF_URL = BASE_URL + "/v1/test/getcrumb"

# Data endpoints
CHART_URL = BASE_URL + "/v8/finance/chart"
QUOTE_SUMMARY_URL = BASE_URL + "/v10/finance/quoteSummary"
QUOTE_URL = QUERY1_URL + "/v7/finance/quote"
OPTIONS_URL = BASE_URL + "/v7/finance/options"
FUNDAMENTALS_URL = BASE_URL + "/ws/fundamentals-timeseries/v1/finance/timeseries"
SEARCH_URL = BASE_URL + "/v1/finance/search"
LOOKUP_URL = QUERY1_URL + "/v1/finance/lookup"
SCREENER_URL = QUERY1_URL + "/v1/finance/screener"
MARKET_SUMMARY_URL = QUERY1_URL + "/v6/finance/quote/marketSummary"
MARKET_TIME_URL = QUERY1_URL + "/v6/finance/markettime"
SECTOR_URL = QUERY1_URL + "/v1/finance/sectors"
INDUSTRY_URL = QUERY1_URL + "/v1/finance/industries"
NEWS_URL = ROOT_URL + "/xhr/ncp"

# Consent form submitted by the CSRF strategy
CONSENT_DONE_URL = ROOT_URL + "/"
CONSENT_NAMESPACE = "yahoo"

# Markers that identify a rejected crumb request
RATE_LIMIT_MARKER = "Too Many Requests"
HTML_MARKER = "<html>"
