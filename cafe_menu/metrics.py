from prometheus_client import Counter

MENU_STORE_OPERATIONS = Counter(
    "menu_store_operations_total",
    "Store operations issued by the menu service",
    ["operation", "outcome"],  # insert|update|delete|get|list , ok|error
)
