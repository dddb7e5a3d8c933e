import sys

from tiny_client.client import TinyClient, prog_name


def run():
    client = TinyClient(prog=prog_name(sys.argv[0]))
    sys.exit(client.main())


if __name__ == '__main__':
    run()
