import logging
import os
import shutil

from commands import exec_redirect_to_log

logger = logging.getLogger(__name__)

ARCHIVE_EXT = ".7z"

def fixture_directories(dir_path, ignore_prefix=('.', '_')):
    '''Returns the names of the fixture directories in `dir_path`, ignoring those starting with `ignore_prefix`.'''

    names = []
    for entry_name in sorted(os.listdir(dir_path)):
        if entry_name.startswith(ignore_prefix):
            logger.debug(f"ignored `{entry_name}` (prefix)")
        elif not os.path.isdir(os.path.join(dir_path, entry_name)):
            logger.debug(f"ignored `{entry_name}` (not directory)")
        else:
            names.append(entry_name)
    return names

def pack_fixtures(dir_path, force=False):
    '''Packs each fixture directory in `dir_path` into an archive with the same name.
    Existing archives are kept unless `force` is `True`.'''

    logger.info(f"packing fixtures in `{dir_path}`")

    for name in fixture_directories(dir_path):
        archive_path = os.path.join(dir_path, f"{name}{ARCHIVE_EXT}")
        if os.path.isfile(archive_path):
            if not force:
                logger.info(f"skipped packing `{name}` (archive exists, force={force})")
                continue
            logger.info(f"removing archive `{archive_path}` (force={force})")
            os.remove(archive_path)

        pack_fixture(os.path.join(dir_path, name), archive_path)

def pack_fixture(dir_path, archive_path):
    '''Packs the fixture directory at `dir_path` into an archive at `archive_path`,
    keeping creation, modification and access times.'''

    logger.info(f"packing `{dir_path}` to `{archive_path}`")

    archive_path = os.path.abspath(archive_path)

    current_dir = os.getcwd()
    os.chdir(dir_path)
    try:
        exec_redirect_to_log(["7z", "a", archive_path, ".", "-mtc", "-mtm", "-mta"], logger, logging.DEBUG)
    finally:
        os.chdir(current_dir)

def unpack_fixtures(dir_path, force=False):
    '''Unpacks every archive in `dir_path` into a fixture directory with the same name.
    Existing directories are kept unless `force` is `True`.'''

    logger.info(f"unpacking fixtures in `{dir_path}`")

    for entry_name in sorted(os.listdir(dir_path)):
        name, ext = os.path.splitext(entry_name)
        if ext.lower() != ARCHIVE_EXT or not os.path.isfile(os.path.join(dir_path, entry_name)):
            logger.debug(f"ignored `{entry_name}` (not an archive)")
            continue

        fixture_dir = os.path.join(dir_path, name)
        if os.path.isdir(fixture_dir):
            if not force:
                logger.info(f"skipped unpacking `{entry_name}` (directory exists, force={force})")
                continue
            logger.info(f"removing directory `{fixture_dir}` (force={force})")
            shutil.rmtree(fixture_dir)

        unpack_archive(os.path.join(dir_path, entry_name), fixture_dir)

def unpack_archive(archive_path, dir_path):
    '''Unpacks the archive at `archive_path` into the new directory at `dir_path`.'''

    logger.info(f"unpacking `{archive_path}` to `{dir_path}`")

    os.makedirs(dir_path)
    exec_redirect_to_log(["7z", "x", archive_path, f"-o{dir_path}"], logger, logging.DEBUG)
