# testbed_node/resources/base.py
from aiocoap.resource import Resource

TEXT_PLAIN = 0  # text/plain;charset=utf-8


class NodeResource(Resource):
    """A CoAP resource that describes the kind of value it exposes.

    ``data_format`` is what the node advertises to the display node
    (``binary``, ``number`` or ``unspecified``) and is also published as the
    resource type in ``/.well-known/core``.
    """

    def __init__(self, name: str, data_format: str):
        super().__init__()
        self.name = name
        self.data_format = data_format
        self.rt = data_format
        self.ct = TEXT_PLAIN

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name} ({self.data_format})>"
