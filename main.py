from rich.pretty import pprint

from argscan import *


if __name__ == '__main__':
    cli = CommandLine()

    # flagged arguments first
    index = cli.get_integer("i", "index", default=0, descr="specifies the index of the item")
    radius = cli.get_double("r", "radius", default=6750.0, descr="the radius of the sphere")
    effect = cli.get_string("f", "filter", default="", descr="specifies an image effect filter")
    show = cli.get_boolean("s", "show-image", descr="whether to display the image during processing")

    # then positional ones
    source = cli.get_string(1, default="", descr="file name of the source image")
    target = cli.get_string(2, default="", descr="file name of the target image")

    cli.show_help_on_request(3)

    pprint(dict(index=index, radius=radius, effect=effect, show=show, source=source, target=target))
