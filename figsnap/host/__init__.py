from .bridge import CloseMessage, ExportMessage, HostAdapter, PluginBridge
from .dump import DumpHost, load_dump, parse_dump
