"""Built-in CLI sub-commands for httpbutler.

* :mod:`~httpbutler.commands.resolve` -- resolve a template with parameters.
* :mod:`~httpbutler.commands.inspect` -- show a template's parsed structure.
* :mod:`~httpbutler.commands.config` -- view and modify resolver settings.

Single commands export a plain callback registered on the root app; the
``config`` group exports a :class:`typer.Typer` sub-application.
"""
