TYPE_STR = "smartagent"

# Receiver-level keys that never reach the monitor schema
ENDPOINT_KEY = "endpoint"
DIMENSION_CLIENTS_KEY = "dimensionClients"
MONITOR_TYPE_KEY = "type"
RECEIVER_KEYS = (ENDPOINT_KEY, DIMENSION_CLIENTS_KEY)

# Top-level section of a collector config file holding receiver entries
RECEIVERS_SECTION = "receivers"

# Separates the receiver family from the instance identifier ("smartagent/redis")
RECEIVER_NAME_SEPARATOR = "/"

# Environment variable consulted when --config is not passed
CONFIG_ENV_VAR = "SMARTAGENT_CONFIG"

LOG_FORMAT = "%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s"

MAX_PORT = 65535
