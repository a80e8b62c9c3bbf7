#!/usr/bin/env python3
"""
Random fuzzer for the entity decoder.
Generates entity-heavy and malformed input to test decoding robustness and
marker correction invariants.
"""

import argparse
import json
import random
import string
import sys
import time
import traceback

from htmlindex import decode, encode, utf16_offset, widen
from htmlindex.constants import ENTITY_DATA
from htmlindex.units import from_units, unit_length

# Fuzzing strategies
ENTITY_NAMES = [name for _, name in ENTITY_DATA]
BOGUS_NAMES = ["foo", "AMP", "ampx", "", "#", "#x", "nbsp ", "lt&gt", "Euml2"]
ASTRAL_CHARS = ["\U0001f692", "\U0001f600", "\U00010000", "\U0010ffff"]
LONE_SURROGATES = ["\ud800", "\udbff", "\udc00", "\udfff"]
INTERESTING_NUMBERS = [
    0, 9, 38, 60, 229, 0xD7FF, 0xD800, 0xDBFF, 0xDC00, 0xDFFF, 0xE000, 0xFFFF,
    0x10000, 128658, 0x10FFFF, 0x110000, 2**32, 2**64,
]


def random_string(min_len=0, max_len=20):
    """Generate random string of printable characters."""
    length = random.randint(min_len, max_len)
    return "".join(random.choice(string.ascii_letters + string.digits + " <>;#") for _ in range(length))


def fuzz_named_entity():
    """Generate a named entity, sometimes broken."""
    r = random.random()
    if r < 0.7:
        return f"&{random.choice(ENTITY_NAMES)};"
    if r < 0.85:
        return f"&{random.choice(BOGUS_NAMES)};"
    return f"&{random.choice(ENTITY_NAMES)}"  # Missing semicolon


def fuzz_numeric_entity():
    """Generate a numeric character reference, sometimes malformed."""
    value = random.choice(INTERESTING_NUMBERS) if random.random() < 0.6 else random.randint(0, 0x11FFFF)
    r = random.random()
    if r < 0.4:
        return f"&#{value};"
    if r < 0.7:
        x = random.choice("xX")
        return f"&#{x}{value:x};"
    if r < 0.8:
        return f"&#{'0' * random.randint(1, 10)}{value};"
    if r < 0.9:
        return f"&#{random.choice(['-', '+', ' ', '_'])}{value};"
    return f"&#{value}"  # Missing semicolon


def fuzz_ampersand_soup():
    """Ampersands and semicolons in awkward places."""
    return random.choice([
        "&", "&&", ";", "&;", "&&amp;", "&amp&amp;", "& amp;", "&#&#65;", "&a&b;c;",
    ])


def fuzz_unicode():
    """Non-BMP characters and lone surrogates."""
    if random.random() < 0.8:
        return random.choice(ASTRAL_CHARS)
    return random.choice(LONE_SURROGATES)


def generate_fuzzed_text():
    """Generate a random fuzzed input string."""
    strategies = [
        (fuzz_named_entity, 30),
        (fuzz_numeric_entity, 25),
        (fuzz_ampersand_soup, 10),
        (fuzz_unicode, 10),
        (random_string, 25),
    ]
    total = sum(weight for _, weight in strategies)
    parts = []
    for _ in range(random.randint(1, 30)):
        r = random.uniform(0, total)
        for strategy, weight in strategies:
            r -= weight
            if r <= 0:
                parts.append(strategy())
                break
    return "".join(parts)


def check_invariants(text):
    """Decode with a marker at every position and verify the corrections.

    Returns a list of problems (empty when everything holds).
    """
    problems = []
    length = unit_length(text)
    markers = list(range(length + 1))
    decoded = decode(text, markers)
    decoded_length = unit_length(decoded)

    if markers != sorted(markers):
        problems.append("markers out of order")
    if markers and markers[0] != 0:
        problems.append(f"first marker moved to {markers[0]}")
    if markers and markers[-1] != decoded_length:
        problems.append(f"end marker {markers[-1]} != decoded length {decoded_length}")
    if any(m < 0 or m > decoded_length for m in markers):
        problems.append("marker out of bounds")

    # Widening code point offsets must agree with utf16_offset, which joins
    # pairs given as surrogate code points the same way widen does
    code_points = len(from_units(text))
    code_point_markers = list(range(code_points + 1))
    widen(text, code_point_markers)
    expected = [utf16_offset(text, index) for index in range(code_points + 1)]
    if code_point_markers != expected:
        problems.append("widen disagrees with unit counting")

    if not any("\ud800" <= ch <= "\udfff" for ch in text):
        if decode(encode(text), []) != text:
            problems.append("encode/decode round trip failed")
    return problems


def run_fuzzer(num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer against the decoder."""
    if seed is not None:
        random.seed(seed)

    crashes = []
    violations = []
    hangs = []
    successes = 0

    print(f"Fuzzing htmlindex with {num_tests} test cases...")
    start_time = time.time()

    for i in range(num_tests):
        text = generate_fuzzed_text()

        if verbose and i % 100 == 0:
            print(f"  Test {i}/{num_tests}...")

        try:
            start = time.perf_counter()
            problems = check_invariants(text)
            elapsed = time.perf_counter() - start

            if elapsed > 5.0:
                hangs.append({"test_num": i, "text": text, "time": elapsed})
                if verbose:
                    print(f"  HANG: Test {i} took {elapsed:.2f}s")
            if problems:
                violations.append({"test_num": i, "text": text, "problems": problems})
                if verbose:
                    print(f"  VIOLATION: Test {i}: {', '.join(problems)}")
            else:
                successes += 1

        except Exception as e:
            crashes.append({
                "test_num": i,
                "text": text,
                "error": str(e),
                "traceback": traceback.format_exc(),
            })
            if verbose:
                print(f"  CRASH: Test {i}: {e}")

    elapsed_total = time.time() - start_time

    # Report results
    print(f"\n{'='*60}")
    print("FUZZING RESULTS: htmlindex")
    print(f"{'='*60}")
    print(f"Total tests:    {num_tests}")
    print(f"Successes:      {successes}")
    print(f"Violations:     {len(violations)}")
    print(f"Crashes:        {len(crashes)}")
    print(f"Hangs (>5s):    {len(hangs)}")
    print(f"Total time:     {elapsed_total:.2f}s")
    print(f"Tests/second:   {num_tests/elapsed_total:.1f}")

    for failure in (violations + crashes)[:5]:
        print(f"\nTest {failure['test_num']}: {failure['text']!r}")
        if "problems" in failure:
            print(f"  {', '.join(failure['problems'])}")
        else:
            print(failure["traceback"])

    if save_failures and (violations or crashes):
        with open("fuzz_failures.json", "w", encoding="utf-8") as f:
            json.dump({"violations": violations, "crashes": crashes}, f, indent=2)
        print("\nFailures saved to fuzz_failures.json")

    return not crashes and not violations


def main():
    parser = argparse.ArgumentParser(description="Fuzz the entity decoder with malformed input")
    parser.add_argument(
        "--num-tests", "-n",
        type=int,
        default=1000,
        help="Number of test cases to generate (default: 1000)",
    )
    parser.add_argument(
        "--seed", "-s",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--save-failures",
        action="store_true",
        help="Save failures to a file",
    )
    parser.add_argument(
        "--sample",
        type=int,
        metavar="N",
        help="Just print N sample fuzzed inputs (no decoding)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i+1} ===")
            print(repr(generate_fuzzed_text()))
            print()
        return

    success = run_fuzzer(
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
