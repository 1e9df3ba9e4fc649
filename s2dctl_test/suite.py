import os
import sys
import unittest
from importlib import import_module
from typing import Union

PACKAGE_DIR = os.path.realpath(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)


def prepare_test_name(test_name):
    """
    Accept test names in fs path format, e.g. "s2dctl_test/tier0/test_app" or
    "s2dctl_test/tier0/test_app.py", and turn them into module path format
    usable by the loader
    """
    candidate = test_name.replace("/", ".")
    py_extension = ".py"
    if not candidate.endswith(py_extension):
        return candidate
    try:
        import_module(candidate)
        return candidate
    except ImportError:
        return candidate[: -len(py_extension)]


def tests_from_suite(
    test_candidate: Union[unittest.TestCase, unittest.TestSuite],
) -> list[str]:
    if isinstance(test_candidate, unittest.TestCase):
        return [test_candidate.id()]
    test_id_list = []
    for test in test_candidate:
        test_id_list.extend(tests_from_suite(test))
    return test_id_list


def autodiscover_tests() -> unittest.TestSuite:
    return unittest.TestLoader().discover(
        start_dir=os.path.join(PACKAGE_DIR, "s2dctl_test"),
        pattern="test_*.py",
        top_level_dir=PACKAGE_DIR,
    )


def discover_tests(
    explicitly_enumerated_tests: list[str],
    exclude_enumerated_tests: bool = False,
) -> list[str]:
    if not explicitly_enumerated_tests:
        return tests_from_suite(autodiscover_tests())
    if exclude_enumerated_tests:
        return [
            test_name
            for test_name in tests_from_suite(autodiscover_tests())
            if test_name not in explicitly_enumerated_tests
        ]

    return tests_from_suite(
        unittest.defaultTestLoader.loadTestsFromNames(
            sorted(set(explicitly_enumerated_tests))
        )
    )


def main() -> None:
    sys.path.insert(0, PACKAGE_DIR)

    explicitly_enumerated_tests = [
        prepare_test_name(arg)
        for arg in sys.argv[1:]
        if arg not in ("-v", "--all-but", "--list")
    ]

    discovered_tests = discover_tests(
        explicitly_enumerated_tests, "--all-but" in sys.argv
    )
    if "--list" in sys.argv:
        print("\n".join(sorted(discovered_tests)))
        print("{0} tests found".format(len(discovered_tests)))
        sys.exit()

    test_runner = unittest.TextTestRunner(
        verbosity=2 if "-v" in sys.argv else 1
    )
    test_result = test_runner.run(
        unittest.defaultTestLoader.loadTestsFromNames(discovered_tests)
    )
    if not test_result.wasSuccessful():
        sys.exit(1)


if __name__ == "__main__":
    main()


# assume that we are in s2dctl root dir
#
# run all tests:
# ./s2dctl_test/suite.py
#
# run specific test:
# s2dctl_test/suite.py s2dctl_test.tier0.test_app.Main -v
#
# run all tests except some:
# s2dctl_test/suite.py s2dctl_test.tier0.test_app.Main --all-but
