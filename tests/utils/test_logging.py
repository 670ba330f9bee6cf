import re

from geodetics.utils.logging import LOGGER, warn_once


def test_logger():
    assert LOGGER.name == 'geodetics'


def test_warn_once(caplog):
    warn_once('test warning')
    assert 'test warning' in caplog.text

    warn_once('test warning')
    assert len(re.findall('test warning', caplog.text)) == 1
