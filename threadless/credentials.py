# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

"""This module holds the pre-shared key a run uses, and binds it to the one
peer it is meant for.

The DTLS transport of aiocoap picks its key material from the client
credentials map of a context, where entries are keyed by URI patterns. A
credential is turned into exactly one such entry, and only for the resolved
address of the target, so a key given for one gateway can never be presented
to another:

>>> from threadless.target import Target
>>> target = Target.from_uri("coaps://gw.local/15001")._replace(
...     address=("192.0.2.1", 5684))
>>> Credential(b"mykey123").bind(target)
{'coaps://192.0.2.1/*': {'dtls': {'psk': b'mykey123', 'client-identity': b''}}}

Nothing here is persisted; the key only lives as long as the run.
"""

import os


class Credential:
    """A pre-shared key and the identity it is presented with

    The identity is empty by default, which is what the gateway expects for
    the key printed on its label."""

    def __init__(self, key: bytes, identity: bytes = b""):
        if not isinstance(key, bytes) or not isinstance(identity, bytes):
            raise TypeError("PSK and identity need to be bytes")
        self.key = key
        self.identity = identity

    @classmethod
    def from_argument(cls, key: str, identity: str = ""):
        """Build a credential from command line arguments, using the raw bytes
        the arguments were given as"""
        return cls(os.fsencode(key), os.fsencode(identity))

    def __repr__(self):
        # never the key itself
        return "<%s identity=%r, %d byte key>" % (
            type(self).__name__,
            self.identity,
            len(self.key),
        )

    def bind(self, target):
        """Return a structure for
        :meth:`aiocoap.credentials.CredentialsMap.load_from_dict` that makes
        this key available for the resolved address of the target, and for
        nothing else.

        Plain ``coap://`` targets get an empty structure: the key is never
        sent unencrypted."""
        if target.address is None:
            raise ValueError("Credentials can only be bound to resolved targets")

        if not target.is_secure:
            return {}

        return {
            "coaps://%s/*" % target.address_hostinfo: {
                "dtls": {
                    "psk": self.key,
                    "client-identity": self.identity,
                }
            }
        }
