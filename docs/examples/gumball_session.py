import logging
import sys

from gumball import GumballState, createMachine


def announce(old: GumballState, event: str, new: GumballState) -> None:
    print(f"  [{old.name} -({event})-> {new.name}]")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)
    machine = createMachine()
    machine.setTrace(announce)

    print("A coin before the machine is stocked.")
    machine.insertCoin()
    print("Stocking.")
    machine.refill(5)
    while not machine.isEmpty():
        print("Paying.")
        machine.insertCoin()
        print("Turning the crank.")
        machine.draw()
        if machine.getState().name == "WINNER":
            print("Turning the crank again.")
            machine.draw()
    print("One more coin.")
    machine.insertCoin()
    print(f"Done: {machine!r}")
