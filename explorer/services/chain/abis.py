"""
Contract interface descriptions.

ABI fragments of the logistics contract families (service, company,
order) and of the token contract. Only the functions the explorer
reads or recognises and the events it decodes are listed.
"""


def _inputs(*params: tuple) -> list[dict]:
    """Build ABI inputs from (name, type) or (name, type, indexed) tuples."""
    result = []
    for param in params:
        entry = {"name": param[0], "type": param[1]}
        if len(param) > 2:
            entry["indexed"] = param[2]
        result.append(entry)
    return result


def _function(
    name: str,
    inputs: tuple = (),
    outputs: tuple = (),
    mutability: str = "nonpayable",
) -> dict:
    return {
        "type": "function",
        "name": name,
        "inputs": _inputs(*inputs),
        "outputs": _inputs(*outputs),
        "stateMutability": mutability,
    }


def _view(name: str, inputs: tuple = (), outputs: tuple = ()) -> dict:
    return _function(name, inputs, outputs, mutability="view")


def _event(name: str, *params: tuple) -> dict:
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": _inputs(*params),
    }


# Every recognised contract exposes these two
INTERFACE_ABI = [
    _view("supportsInterface", (("interfaceId", "bytes4"),), (("", "bool"),)),
    _view("getDkargoPrefix", outputs=(("", "string"),)),
]

SERVICE_ABI = [
    *INTERFACE_ABI,
    _function("register", (("company", "address"),)),
    _function("unregister", (("company", "address"),)),
    _function("markOrderPayed", (("order", "address"),)),
    _function("settle", (("company", "address"),)),
    _event("CompanyRegistered", ("company", "address", True)),
    _event("CompanyUnregistered", ("company", "address", True)),
    _event("OrderPayed", ("order", "address", True)),
    _event(
        "Settled",
        ("recipient", "address", True),
        ("payment", "uint256", False),
        ("rest", "uint256", False),
    ),
]

COMPANY_ABI = [
    *INTERFACE_ABI,
    _view("name", outputs=(("", "string"),)),
    _function("launch", (("order", "address"), ("transportId", "uint256"))),
    _function(
        "updateOrderCode",
        (("order", "address"), ("transportId", "uint256"), ("code", "uint256")),
    ),
    _function("addOperator", (("operator", "address"),)),
    _function("removeOperator", (("operator", "address"),)),
    _function("setName", (("name", "string"),)),
    _function("setUrl", (("url", "string"),)),
    _function("setRecipient", (("recipient", "address"),)),
    _event("OperatorAdded", ("operator", "address", True)),
    _event("OperatorRemoved", ("operator", "address", True)),
    _event(
        "CompanyNameSet",
        ("oldName", "string", False),
        ("newName", "string", False),
    ),
    _event(
        "CompanyUrlSet",
        ("oldUrl", "string", False),
        ("newUrl", "string", False),
    ),
    _event(
        "RecipientSet",
        ("oldRecipient", "address", True),
        ("newRecipient", "address", True),
    ),
]

ORDER_ABI = [
    *INTERFACE_ABI,
    _view("orderid", outputs=(("", "uint256"),)),
    _view("trackingCount", outputs=(("", "uint256"),)),
    _view("isComplete", outputs=(("", "bool"),)),
    _view(
        "tracking",
        (("index", "uint256"),),
        (
            ("time", "uint256"),
            ("addr", "address"),
            ("code", "uint256"),
            ("incentives", "uint256"),
        ),
    ),
    _function("submitOrderCreate"),
    _function("setUrl", (("url", "string"),)),
    _event("OrderUrlSet", ("oldUrl", "string", False), ("newUrl", "string", False)),
]

TOKEN_ABI = [
    *INTERFACE_ABI,
    _function("transfer", (("to", "address"), ("value", "uint256"))),
    _function(
        "transferFrom",
        (("from", "address"), ("to", "address"), ("value", "uint256")),
    ),
    _function("burn", (("value", "uint256"),)),
    _function("approve", (("spender", "address"), ("value", "uint256"))),
    _event(
        "Transfer",
        ("from", "address", True),
        ("to", "address", True),
        ("value", "uint256", False),
    ),
    _event(
        "Approval",
        ("owner", "address", True),
        ("spender", "address", True),
        ("value", "uint256", False),
    ),
]

# Interface descriptions whose events are decoded per network flavor
LOGISTICS_ABIS = (SERVICE_ABI, COMPANY_ABI, ORDER_ABI)
TOKEN_ABIS = (TOKEN_ABI,)
