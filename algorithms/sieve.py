"""
sieve.py — Sieve of Eratosthenes
================================
Generator-based prime sieve over 0..n.  Yields a SieveStep:
  1. Start                     →  every number from 2 up flagged prime
  2. Each p with p·p ≤ n that is still flagged
       a. "found prime p"      →  current_prime = p
       b. multiples crossed    →  marking = p·p, p·p+p, … ≤ n
  3. Final step                →  the list of primes, complete=True

Crossing out starts at p·p: every smaller multiple of p has a smaller
prime factor and was crossed out already.
"""

from typing import Generator, List

from algorithms.step import SieveStep


PSEUDOCODE: List[str] = [
    "def sieve(n):",                                      # 0
    "    is_prime = [True] * (n + 1)",                    # 1
    "    is_prime[0] = is_prime[1] = False",              # 2
    "    for p in range(2, isqrt(n) + 1):",               # 3
    "        if is_prime[p]:",                            # 4
    "            for i in range(p * p, n + 1, p):",       # 5
    "                is_prime[i] = False",                # 6
    "    return [p for p in range(n + 1) if is_prime[p]]",  # 7
]


def sieve(limit: int) -> Generator[SieveStep, None, None]:
    """
    Args:
        limit : Largest number to test.  Must be at least 2.
    """
    if limit < 2:
        raise ValueError("The sieve needs n >= 2")
    code = PSEUDOCODE
    is_prime = [True] * (limit + 1)
    is_prime[0] = is_prime[1] = False

    yield SieveStep(is_prime=tuple(is_prime), code=code[2],
                    description=f"Mark 2..{limit} as possibly prime; 0 and 1 are not prime")

    p = 2
    while p * p <= limit:
        if is_prime[p]:
            yield SieveStep(is_prime=tuple(is_prime), code=code[4], current_prime=p,
                            description=f"{p} is still unmarked, so it is prime. Crossing out its multiples")
            multiples = tuple(range(p * p, limit + 1, p))
            for i in multiples:
                is_prime[i] = False
            yield SieveStep(is_prime=tuple(is_prime), code=code[6], current_prime=p,
                            marking=multiples,
                            description=f"Crossed out the multiples of {p} from {p * p} to {multiples[-1]}")
        p += 1

    primes = tuple(i for i, flag in enumerate(is_prime) if flag)
    yield SieveStep(is_prime=tuple(is_prime), code=code[7], primes=primes, complete=True,
                    description=f"Sieve complete: {len(primes)} primes up to {limit}: "
                                + ", ".join(str(q) for q in primes))
