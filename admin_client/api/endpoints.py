"""Endpoint paths of the dashboard backend (relative to ``API_BASE_URL``)."""

# Auth
AUTH_LOGIN_PATH = "/auth/login"
AUTH_ME_PATH = "/auth/me"
AUTH_REFRESH_TOKEN_PATH = "/auth/refresh"

# Endpoints that never carry the access token and never trigger a refresh.
AUTH_ENDPOINTS = (AUTH_LOGIN_PATH, AUTH_REFRESH_TOKEN_PATH)

# Vendors
GET_VENDORS_PATH = "/general/vendors"
VENDOR_PATH = "/general/vendor"
ACTIVATE_VENDOR_PATH = "/general/vendor/activate"
DEACTIVATE_VENDOR_PATH = "/general/vendor/deactivate"
GET_VENDOR_API_CONFIGS_PATH = "/general/vendor/api-configs"
GET_VENDOR_TYPES_PATH = "/general/vendor-types"
GET_PAYMENT_TERMS_PATH = "/general/payment-terms"
GET_COUNTRIES_PATH = "/general/countries"
GET_STATES_PATH = "/general/states"
GET_STATES_BY_COUNTRY_PATH = "/general/states/country"
SEARCH_VENDORS_PATH = "/general/vendors/search"

# Vendor lists
GET_VENDOR_LISTS_PATH = "/general/lists"
GET_LISTS_DROPDOWN_PATH = "/general/lists/dropdown"
LIST_PATH = "/general/list"
ACTIVATE_LIST_PATH = "/general/list/activate"
DEACTIVATE_LIST_PATH = "/general/list/deactivate"
UPDATE_LIST_STATUS_PATH = "/general/list/status"
UPLOAD_CSV_PATH = "/general/list/upload-csv"
GET_LIST_VERTICAL_PATH = "/general/list-verticals"
GET_DEDUPE_BACK_PATH = "/general/dedupe-backs/user"

# Active campaigns
GET_ACTIVE_CAMPAIGNS_PATH = "/general/active-campaigns"
ACTIVE_CAMPAIGN_PATH = "/general/active-campaign"
GET_CAMPAIGNS_DROPDOWN_PATH = "/general/campaigns/dropdown"
GET_TEAMS_PATH = "/general/teams"
TEAM_PATH = "/general/team"
GET_VENDORS_FOR_ACTIVE_CAMPAIGN_PATH = "/general/vendors-for-active-campaign"
VENDOR_FOR_ACTIVE_CAMPAIGN_PATH = "/general/vendor-for-active-campaign"

# Platforms
GET_PLATFORMS_PATH = "/general/platforms"
PLATFORM_PATH = "/general/platform"
GET_PLATFORM_TYPES_PATH = "/general/platform-types"
GET_LEAD_RETURN_CUTOFFS_PATH = "/general/lead-return-cutoffs"
ACTIVATE_PLATFORM_PATH = "/general/platform/activate"
DEACTIVATE_PLATFORM_PATH = "/general/platform/deactivate"
PLATFORM_PRESETS_BY_PROVIDER_PATH = "/platform-presets/by-provider"

# Outgoing posts
GET_OUTGOING_POSTS_PATH = "/general/outgoing-posts"
GET_PRIORITY_POSTS_PATH = "/general/outgoing-posts/priority"
GET_BIDDING_POSTS_PATH = "/general/outgoing-posts/bidding"

# Reports
GET_LIST_IMPORT_STATS_DROPDOWN_PATH = "/general/reports/list-import-stats/dropdown"
GET_LIST_IMPORT_STATS_PATH = "/general/reports/list-import-stats"
GET_LEAD_DELIVERY_DROPDOWN_PATH = "/general/reports/lead-delivery/dropdown"
GET_LEAD_DELIVERY_PATH = "/general/reports/lead-delivery"
GET_SCRUB_REPORT_PATH = "/general/reports/scrub"
