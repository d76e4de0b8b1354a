import pytest

from game_servers import log
from game_servers.errors import ConfigError, GameServerError, NonZeroExit, wrap_error


class TestWrapError:

    def test_context_chain_reads_outermost_first(self):
        with pytest.raises(NonZeroExit) as exc_info:
            with wrap_error('Failed during update'):
                with wrap_error('Failed to download'):
                    raise NonZeroExit('curl -O x', 22)
        assert str(exc_info.value) == (
            'Failed during update\n'
            '  caused by: Failed to download\n'
            '  caused by: Failed during: curl -O x\n'
            'Got non-zero exit code: 22'
        )

    def test_os_error_is_converted(self):
        with pytest.raises(GameServerError) as exc_info:
            with wrap_error('Failed to extract'):
                raise FileNotFoundError(2, 'No such file or directory')
        assert str(exc_info.value).startswith('Failed to extract: [FileNotFoundError]')
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)


class TestLogLevel:

    @pytest.mark.parametrize('value', ['0', '1', '2', '3'])
    def test_valid_levels(self, value):
        assert log.configure(value) == int(value)

    def test_invalid_level(self):
        with pytest.raises(ConfigError) as exc_info:
            log.configure('verbose')
        assert str(exc_info.value) == 'Found unexpected log level verbose'

    def test_debug_hidden_at_info(self, capsys):
        log.debug('hidden')
        log.warn('shown')
        err = capsys.readouterr().err
        assert 'hidden' not in err
        assert 'WARN: shown' in err
