#!/usr/bin/env python3
"""
Random fuzzer for the sanitizer.
Generates hostile and malformed HTML and checks every output for:
- no crash,
- only allowed tags as live elements,
- only allowed schemes in href/src/action,
- idempotence (sanitizing the output again changes nothing).
"""

import argparse
import random
import string
import sys
import time
import traceback

from sanehtml import DEFAULT_POLICY, STRICT_POLICY, sanitize
from sanehtml.constants import URL_ATTRIBUTES
from sanehtml.parser import parse
from sanehtml.urls import url_scheme

POLICIES = {
    "default": DEFAULT_POLICY,
    "strict": STRICT_POLICY,
}

TAGS = [
    "div", "span", "p", "a", "img", "table", "tr", "td", "th", "ul", "ol", "li",
    "form", "input", "button", "select", "option", "textarea", "script", "style",
    "title", "meta", "link", "br", "hr", "h1", "h2", "h3", "b", "i", "em", "strong",
    "iframe", "object", "embed", "video", "audio", "source", "svg", "math",
    "template", "noscript", "pre", "code", "blockquote", "article", "section",
    "details", "summary", "base", "frame", "xmp", "marquee", "abbr", "q",
]

ATTRIBUTES = [
    "id", "class", "style", "href", "src", "action", "alt", "title", "name", "rel",
    "onclick", "onload", "onerror", "onmouseover", "data-x", "target", "lang", "dir",
    "formaction", "xlink:href", "srcset", "cite",
]

# Scheme smuggling attempts for URL-valued attributes.
URLS = [
    "javascript:alert(1)",
    "JaVaScRiPt:alert(1)",
    "  javascript:alert(1)",
    "java\tscript:alert(1)",
    "java\nscript:alert(1)",
    "java\x00script:alert(1)",
    "&#106;avascript:alert(1)",
    "&#x6A;avascript&colon;alert(1)",
    "&#0000106&#0000097&#0000118&#0000097&#0000115&#0000099&#0000114&#0000105&#0000112&#0000116:alert(1)",
    "jav&#x09;ascript:alert(1)",
    "vbscript:msgbox(1)",
    "data:text/html,<script>alert(1)</script>",
    "data:image/svg+xml;base64,PHN2Zz4=",
    "https://example.com/?a=1&b=2",
    "http://example.com",
    "mailto:someone@example.com",
    "/relative/path",
    "//protocol.relative",
    "#fragment",
    ":alert(1)",
    "http://[::1",
]

TEXTS = [
    "hello", "x < y", "a & b", "\"quoted\"", "'single'", "&amp;", "&lt;script&gt;",
    "visit https://example.com today", "see http://a.io, then https://b.io.",
    "\u00a0", "\u200b", "\ufeff", "",
]


def random_string(min_len=0, max_len=12):
    """Generate random ASCII string."""
    length = random.randint(min_len, max_len)
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def fuzz_attribute():
    name = random.choice(ATTRIBUTES)
    if random.random() < 0.1:
        name = name.upper()
    if name in ("href", "src", "action", "formaction", "xlink:href", "cite"):
        value = random.choice(URLS)
    elif name.startswith("on"):
        value = "alert(1)"
    else:
        value = random.choice([random_string(), random.choice(TEXTS)])
    quote = random.choice(['"', "'", ""])
    if not quote and any(c in value for c in " \t\n>\"'="):
        quote = '"'
    return f"{name}={quote}{value}{quote}"


def fuzz_open_tag():
    tag = random.choice(TAGS)
    if random.random() < 0.1:
        tag = tag.upper()
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 4)))
    return f"<{tag} {attrs}>" if attrs else f"<{tag}>"


def fuzz_close_tag():
    return f"</{random.choice(TAGS)}>"


def fuzz_comment():
    return random.choice(["<!-- c -->", "<!--<script>alert(1)</script>-->", "<!-->", "<!--->"])


def fuzz_nested_structure(depth=0, max_depth=8):
    if depth >= max_depth or random.random() < 0.3:
        return random.choice(TEXTS)
    tag = random.choice(TAGS)
    children = "".join(fuzz_nested_structure(depth + 1, max_depth) for _ in range(random.randint(0, 3)))
    attrs = " ".join(fuzz_attribute() for _ in range(random.randint(0, 2)))
    open_tag = f"<{tag} {attrs}>" if attrs else f"<{tag}>"
    return f"{open_tag}{children}</{tag}>"


def generate_fuzzed_html():
    """Generate a random fuzzed HTML fragment."""
    strategies = [
        fuzz_open_tag,
        fuzz_close_tag,
        fuzz_comment,
        fuzz_nested_structure,
        lambda: random.choice(TEXTS),
        lambda: "<!DOCTYPE html>",
    ]
    return "".join(random.choice(strategies)() for _ in range(random.randint(1, 12)))


def check_output(html, policy):
    """Return a list of property violations for sanitizing `html` with `policy`."""
    problems = []
    out = sanitize(html, policy)
    body = parse(out).body
    for element in body.find_all(True):
        if element.name not in policy.allowed_tags:
            problems.append(f"disallowed live tag <{element.name}>")
        for key, value in element.attrs.items():
            if key in URL_ATTRIBUTES:
                scheme = url_scheme(value)
                if scheme is None or (scheme and scheme not in policy.allowed_schemes):
                    problems.append(f"unsafe {key}={value!r}")
    again = sanitize(out, policy)
    if again != out:
        problems.append(f"not idempotent: {out!r} -> {again!r}")
    return out, problems


def run_fuzzer(policy_name, num_tests, seed=None, verbose=False, save_failures=False):
    """Run the fuzzer against one policy preset."""
    if seed is not None:
        random.seed(seed)

    policy = POLICIES[policy_name]
    crashes = []
    violations = []
    slow = []

    print(f"Fuzzing sanitizer with {policy_name} policy ({num_tests} tests, seed={seed})")
    start_time = time.time()

    for i in range(num_tests):
        html = generate_fuzzed_html()
        test_start = time.time()
        try:
            out, problems = check_output(html, policy)
        except Exception as e:
            crashes.append(
                {
                    "test_num": i,
                    "html": html,
                    "error": str(e),
                    "traceback": traceback.format_exc(),
                }
            )
            if verbose:
                print(f"\n[CRASH] Test #{i}: {e}")
            continue
        elapsed = time.time() - test_start

        if problems:
            violations.append({"test_num": i, "html": html, "output": out, "problems": problems})
            if verbose:
                print(f"\n[VIOLATION] Test #{i}: {problems[0]}")
        if elapsed > 1.0:
            slow.append({"test_num": i, "html": html, "time": elapsed})

        if (i + 1) % 100 == 0:
            print(f"  {i + 1}/{num_tests} done...", end="\r")

    total_time = time.time() - start_time
    print(f"\n\n{'=' * 60}")
    print(f"RESULTS: {policy_name}")
    print(f"{'=' * 60}")
    print(f"Tests run:   {num_tests}")
    print(f"Crashes:     {len(crashes)}")
    print(f"Violations:  {len(violations)}")
    print(f"Slow (>1s):  {len(slow)}")
    print(f"Total time:  {total_time:.2f}s")

    for crash in crashes[:5]:
        print(f"\nTest #{crash['test_num']}:")
        print(f"  HTML: {crash['html'][:200]!r}")
        print(f"  Error: {crash['error']}")

    for violation in violations[:5]:
        print(f"\nTest #{violation['test_num']}:")
        print(f"  HTML: {violation['html'][:200]!r}")
        for problem in violation["problems"]:
            print(f"  - {problem}")

    if save_failures and (crashes or violations):
        filename = f"fuzz_failures_{policy_name}_{int(time.time())}.txt"
        with open(filename, "w") as f:
            f.write(f"Fuzzing results for {policy_name}\n")
            f.write(f"Seed: {seed}\n\n")
            for crash in crashes:
                f.write(f"=== CRASH #{crash['test_num']} ===\n")
                f.write(f"HTML:\n{crash['html']}\n")
                f.write(f"Traceback:\n{crash['traceback']}\n\n")
            for violation in violations:
                f.write(f"=== VIOLATION #{violation['test_num']} ===\n")
                f.write(f"HTML:\n{violation['html']}\n")
                f.write(f"Output:\n{violation['output']}\n")
                f.write("\n".join(violation["problems"]) + "\n\n")
        print(f"\nFailures saved to {filename}")

    return not crashes and not violations


def main():
    parser = argparse.ArgumentParser(description="Fuzz the sanitizer with hostile HTML")
    parser.add_argument(
        "--policy", "-p",
        choices=sorted(POLICIES),
        default="default",
        help="Policy preset to fuzz (default: default)",
    )
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
        help="Just print N sample fuzzed HTML fragments (no sanitizing)",
    )

    args = parser.parse_args()

    if args.sample:
        if args.seed is not None:
            random.seed(args.seed)
        for i in range(args.sample):
            print(f"=== Sample {i + 1} ===")
            print(generate_fuzzed_html())
            print()
        return

    success = run_fuzzer(
        args.policy,
        args.num_tests,
        seed=args.seed,
        verbose=args.verbose,
        save_failures=args.save_failures,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
