import sys

from rich.pretty import pprint

from seriatim import *


config = (
    Config("build-string", about="prepend with -b, append with -a; the order of occurrences matters")
    .arg(parsed_param("BEFORE", lambda value: ("before", value)).short("b").long("before").describe("prepend a value"))
    .arg(parsed_param("AFTER", lambda value: ("after", value)).short("a").long("after").describe("append a value"))
    .arg(flag(lambda: ("verbose", True)).short("v").long("verbose").describe("print the accumulated state"))
)


if __name__ == '__main__':
    verbose = False
    accumulator = ""

    for result in config.iter(sys.argv[1:] or ["-b1", "-va", "2", "--after=3", "--before", "4"]):
        match result:
            case OptionError():
                config.exit_error(result)
            case ("before", value):
                accumulator = value + accumulator
            case ("after", value):
                accumulator = accumulator + value
            case ("verbose", _):
                verbose = True

    if verbose:
        pprint(config)
    print(accumulator)
