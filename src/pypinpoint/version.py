PROJECT_NAME = "pypinpoint"
PROJECT_NAME_TEXT = "PyPinpoint"
VERSION = "0.1.0"
AUTHOR = "GreenMachine582"
AUTHOR_EMAIL = "greenmachine582@gmail.com"
DESCRIPTION = "Resolve pasted map links, short links and place names to validated coordinates."
URL = "https://github.com/GreenMachine582/PyPinpoint"
