
import os

from jupyter_core.paths import jupyter_config_path

from traitlets import Unicode, Enum, Bool, HasTraits, List, TraitError, validate
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound

from .paths import Path
from .log import ProteanError


CONFIG_BASENAME = 'protean_config'


class ProteanConfigurable(HasTraits):

    def configured_traits(self, cls):
        traits = cls.class_own_traits(config=True)
        c = {}
        for name, _ in traits.items():
            c[name] = getattr(self, name)
        return c


_config_cache = {}
def config_instance(cls):
    if cls in _config_cache:
        return _config_cache[cls]
    instance = _config_cache[cls] = cls()
    return instance


def _load_config_files(basefilename, path=None):
    """Load config files (json) by filename and path.

    yield each config object in turn.
    """

    if not isinstance(path, list):
        path = [path]
    for path in path[::-1]:
        # path list is in descending priority order, so load files backwards:
        loader = JSONFileConfigLoader(basefilename+'.json', path=path)
        config = None
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            pass
        if config:
            yield config


def recursive_update(target, new, include_none):
    """Recursively update one dictionary using another.

    None values will delete their keys.
    """
    for k, v in new.items():
        if isinstance(v, dict):
            if k not in target:
                target[k] = {}
            recursive_update(target[k], v, include_none)
            if not include_none and not target[k]:
                # Prune empty subdicts
                del target[k]

        elif not include_none and v is None:
            target.pop(k, None)

        else:
            target[k] = v


def build_config(entrypoint, include_none=False):
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, list(entrypoint_configurables.keys())
        ))

    # Get config from disk:
    disk_config = {}
    path = jupyter_config_path()
    path.insert(0, os.getcwd())
    for c in _load_config_files(CONFIG_BASENAME, path=path):
        recursive_update(disk_config, c, include_none)

    config = {}
    configurable = entrypoint_configurables[entrypoint]
    for c in reversed(configurable.mro()):
        if issubclass(c, ProteanConfigurable):
            recursive_update(config, config_instance(c).configured_traits(c), include_none)
            if (c.__name__ in disk_config):
                recursive_update(config, disk_config[c.__name__], include_none)

    return config


def get_defaults_for_argparse(entrypoint):
    return build_config(entrypoint)


class Global(ProteanConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class _Typed(ProteanConfigurable):

    record_type = Unicode(
        None,
        allow_none=True,
        help="the type of the documents, as 'module:Class'. "
             "Documents are treated as untyped JSON if not set.",
    ).tag(config=True)


class _Printing(ProteanConfigurable):

    use_color = Bool(
        True,
        help="whether to use ANSI color code escapes for text output.",
    ).tag(config=True)


class Diff(_Typed, _Printing):

    atomic = List(
        Unicode(),
        default_value=[],
        help="paths that are diffed as a whole, e.g. 'cells.*.source'.",
    ).tag(config=True)

    @validate('atomic')
    def _validate_atomic(self, proposal):
        for p in proposal['value']:
            try:
                Path.parse(p)
            except ProteanError as e:
                raise TraitError('invalid atomic path %r: %s' % (p, e))
        return proposal['value']


class Patch(_Typed):
    pass


class Show(_Printing):
    pass


class ProteanDiff(Global, Diff):
    pass

class ProteanPatch(Global, Patch):
    pass

class ProteanShow(Global, Show):
    pass


entrypoint_configurables = {
    'protean-diff': ProteanDiff,
    'protean-patch': ProteanPatch,
    'protean-show': ProteanShow,
}
