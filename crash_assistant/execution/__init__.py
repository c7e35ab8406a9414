"""
Subprocess execution: blocking runner, command results, completion
dispatch and the symbolicatecrash invoker.

Import from the submodules directly; discovery code depends on
`execution.process`, and the invoker depends on discovery.
"""
