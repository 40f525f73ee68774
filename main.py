from rich.pretty import pprint

from cmdargs import *

parser = ArgumentParser(shell=True)

val1 = parser.value("", "val1", "a float with a default", 3.14)
val2 = parser.value("", "val2", "a string without a default")
imp1 = parser.implicit("", "imp1", "an implicit integer", 10)
imp2 = parser.implicit("", "imp2", "another implicit integer", 20)
flag1 = parser.flag("", "flag1", "a flag")
flag2 = parser.flag("", "flag2", "another flag")


if __name__ == '__main__':
    parser.parse()
    pprint({
        "val1": val1.value,
        "val2": val2.value,
        "imp1": imp1.value,
        "imp2": imp2.value,
        "flag1": flag1.value,
        "flag2": flag2.value,
    })
