# SPDX-FileCopyrightText: the threadless contributors
#
# SPDX-License-Identifier: MIT

import doctest
import os
from pathlib import Path

import threadless


def _load_tests():
    """Create a test function per doctest of every threadless module, in a
    way that both unittest and pytest pick up"""
    i = 0
    base = Path(threadless.__file__).parent
    for root, dn, fn in os.walk(base):
        for f in sorted(fn):
            if not f.endswith(".py") or f == "__main__.py":
                continue
            parts = list(Path(root).relative_to(base.parent).parts)
            if f != "__init__.py":
                parts.append(Path(f).stem)
            p = ".".join(parts)
            try:
                suite = doctest.DocTestSuite(p)
            except ValueError:
                # module without docstrings that contain tests
                continue
            for t in suite:
                i += 1

                def test(t=t):
                    result = t.run()
                    for f in result.failures:
                        print(f[1])
                        raise RuntimeError("Doctest failed (see above)")
                    for e in result.errors:
                        raise RuntimeError(e[1])

                globals()["test_%03d" % i] = test


_load_tests()
