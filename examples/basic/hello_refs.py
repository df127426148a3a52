"""Resolve a reference and render a field in 3 lines."""

from refmark import DictReferenceTable, render

table = DictReferenceTable({"Foo.bar": "foo.html#bar"})
print(render("See @{Foo.bar|the bar function}.", table))
