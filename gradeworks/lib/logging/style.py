from pygments.style import Style
from pygments.token import Keyword, Name, Number, Punctuation, String


class LogStyle(Style):
    styles = {
        Name.Tag: "ansicyan",
        String: "ansigreen",
        Number: "ansiyellow",
        Keyword.Constant: "ansimagenta",
        Punctuation: "ansibrightblack",
    }
