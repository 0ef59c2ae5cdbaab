#!/usr/bin/env python3
"""primefield demo.

Usage:
    python -m primefield.demo.run_demo            # local arithmetic only
    python -m primefield.demo.run_demo --remote   # also query the service

The script:
1. Builds two U512 elements (2 and 3) with modulus U512.MAX and prints
   their sum, difference and product.
2. Shows exponentiation, inversion and division over the default prime.
3. With ``--remote`` (needs the ``service`` extra), repeats the operations
   against the service at PRIMEFIELD_SERVICE_URL and checks the answers agree.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Tuple

from primefield.arith.element import FieldElement
from primefield.arith.errors import FieldError
from primefield.arith.uint import U512
from primefield.config import DEFAULT_PRIME, LOG_LEVEL, SERVICE_URL


def banner(msg: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}")


def wide_elements() -> Tuple[FieldElement, FieldElement]:
    return FieldElement(U512(2), U512.MAX), FieldElement(U512(3), U512.MAX)


def prime_elements() -> Tuple[FieldElement, FieldElement]:
    return FieldElement(12345, DEFAULT_PRIME), FieldElement(67890, DEFAULT_PRIME)


def run_local() -> None:
    banner("1. U512 arithmetic (p = U512.MAX)")
    a, b = wide_elements()
    print(f"   a + b = {a + b!r}")
    print(f"   a - b = {a - b!r}")
    print(f"   a * b = {a * b!r}")

    banner("2. Fermat arithmetic (p = 2^127 - 1)")
    x, y = prime_elements()
    print(f"   x^(p-1)   = {x.pow(DEFAULT_PRIME - 1).value}")
    print(f"   y^-1      = {y.inverse().value}")
    q = x / y
    print(f"   x / y     = {q.value}")
    print(f"   (x/y) * y = {(q * y).value}  (x = {x.value})")


def run_remote(url: str) -> bool:
    # needs the optional service extra (httpx)
    import httpx

    from primefield.service.client import FieldClient

    banner(f"3. Remote check against {url}")
    a, b = wide_elements()
    x, y = prime_elements()
    checks: List[Tuple[str, FieldElement, FieldElement]] = []
    ok = True
    with FieldClient(base_url=url) as client:
        try:
            checks.append(("U512 add", client.add(a, b), a + b))
            checks.append(("U512 sub", client.sub(a, b), a - b))
            checks.append(("U512 mul", client.mul(a, b), a * b))
            checks.append(("div", client.div(x, y), x / y))
            checks.append(("pow", client.pow(x, 5), x.pow(5)))
        except (httpx.HTTPError, FieldError) as exc:
            print(f"   request failed: {exc}")
            return False
    for name, remote, local in checks:
        match = "✓" if remote == local else "✗"
        ok = ok and remote == local
        print(f"   {name:<9} {match}")
    return ok


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--remote", action="store_true", help="also query the service")
    parser.add_argument("--url", default=SERVICE_URL, help="service base URL")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL)
    run_local()
    if args.remote and not run_remote(args.url):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
