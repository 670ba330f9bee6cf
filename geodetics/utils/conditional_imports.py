"""
Intercepts failed imports of optional backends (e.g. geographiclib) so the user is
told which geodetics extra provides them, or optionally installs them on the spot.
"""

__all__ = ['ConditionalPackageInterceptor']

from importlib import util
import subprocess
import sys
from typing import Dict, Union

from geodetics.utils.mixins import LoggingMixin


class ConditionalPackageInterceptor(LoggingMixin):
    """
    A meta path finder consulted after every regular finder has failed. Only packages
    registered through .permit_packages() are handled; everything else falls through to
    the usual ModuleNotFoundError.

    To use, register it in the root-most __init__.py, before any optional import runs:

        ConditionalPackageInterceptor.permit_packages({'geographiclib': 'geodetics[karney]'})
        sys.meta_path.append(ConditionalPackageInterceptor)

    """

    PERMITTED_PACKAGES: Dict[str, str] = {}
    AUTO_DOWNLOAD = False

    @classmethod
    def permit_packages(cls, packages: Union[list, dict]) -> None:
        """
        Registers optional packages, mapping the import name to the pip requirement
        that provides it.

        Args:
            packages: (Union[list, dict])
                As a list, the import name is also the pip requirement:
                    ['geographiclib']
                As a dict, import name -> pip requirement:
                    {'geographiclib': 'geodetics[karney]'}

        Returns:
            None
        """
        if isinstance(packages, list):
            cls.PERMITTED_PACKAGES.update({item: item for item in packages})
        elif isinstance(packages, dict):
            cls.PERMITTED_PACKAGES.update(packages)
        else:
            raise TypeError(
                f"Permitted packages must be submitted as a list or dict, not {type(packages)}"
            )

    @classmethod
    def permit_auto_download(cls, option: bool) -> None:
        """
        Defines whether permitted packages may be pip installed on first import. Default False.
        """
        cls.AUTO_DOWNLOAD = option

    @classmethod
    def find_spec(  # pylint: disable=unused-argument, inconsistent-return-statements
            cls, name, path, target=None
    ):
        """
        Called by importlib once no other finder located `name`.

        Args:
            name (str): The name of the package
            path:
            target:

        Returns:
            The module spec of a freshly installed package, or None
        """
        if name not in cls.PERMITTED_PACKAGES:
            return

        requirement = cls.PERMITTED_PACKAGES[name]
        if cls.AUTO_DOWNLOAD:
            cls.warn_once(
                'Module %r not installed. Attempting to pip install %s...', name, requirement
            )
            try:
                subprocess.run(
                    [sys.executable, '-m', 'pip', 'install', requirement],
                    check=True
                )
            except subprocess.CalledProcessError:
                return None

            return util.find_spec(name)

        raise ModuleNotFoundError(
            f"You are attempting to use a feature which requires an optional installation ({name}). "
            "Please choose one of the following options to continue: \n\n "
            "1) Enable package auto-installation using: \n"
            "    from geodetics.utils.conditional_imports import ConditionalPackageInterceptor \n"
            "    ConditionalPackageInterceptor.permit_auto_download(True) \n\n"
            "2) Pip install the package yourself using the following command: \n"
            f"    pip install {requirement}"
        )
