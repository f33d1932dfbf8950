# vim: set expandtab shiftwidth=4 softtabstop=4:

# === UCSF ChimeraX Copyright ===
# Copyright 2022 Regents of the University of California. All rights reserved.
# This software is provided pursuant to the ChimeraX license agreement, which
# covers academic and commercial uses. For more information, see
# <http://www.rbvi.ucsf.edu/chimerax/docs/licensing.html>
#
# This file is part of the ChimeraX library. You can also redistribute and/or
# modify it under the GNU Lesser General Public License version 2.1 as
# published by the Free Software Foundation. For more details, see
# <https://www.gnu.org/licenses/old-licenses/lgpl-2.1.html>
#
# This file is distributed WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. This notice
# must be embedded in or attached to all copies, including partial copies, of
# the software or any revisions or derivations thereof.
# === UCSF ChimeraX Copyright ===

# -----------------------------------------------------------------------------
# Python readers for density map file formats.
#
class MapFileFormat:
  def __init__(self, description, name, prefixes, suffixes, module_name = None):
    self.description = description
    self.name = name
    self.prefixes = prefixes
    self.suffixes = suffixes
    self.module_name = module_name or name

  @property
  def open_func(self):
    from importlib import import_module
    module = import_module('.' + self.module_name, __package__)
    return module.open

# -----------------------------------------------------------------------------
# File description, file reader module name, file prefixes, and file suffixes.
# BRIX maps use the DSN6 block layout with a text header and share the reader.
#
file_formats = [
  MapFileFormat('BRIX density map', 'brix', ['brix'], ['brix'], module_name = 'dsn6'),
  MapFileFormat('DSN6 density map', 'dsn6', ['dsn6'], ['omap', 'dsn6', 'dn6']),
  ]

from .errors import UserError
# -----------------------------------------------------------------------------
#
class UnknownFileType(UserError):

  def __init__(self, path):

    self.path = path
    Exception.__init__(self)
    
  def __str__(self):

    return suffix_warning([self.path])

# -----------------------------------------------------------------------------
#
class FileFormatError(UserError):
  pass
  
# -----------------------------------------------------------------------------
#
def suffix_warning(paths):

  path_string = ' '.join(paths)

  if len(paths) > 1:
    pluralize = 'es'
  else:
    pluralize = ''
    
  suffixes = sum([f.suffixes for f in file_formats], [])
  suffix_string = ' '.join(['.'+s for s in suffixes])

  prefixes = sum([f.prefixes for f in file_formats], [])
  prefix_string = ' '.join([s+':' for s in prefixes])
  
  msg = ('Warning: Unrecognized file suffix%s for %s.\n' %
         (pluralize, path_string) +
         '\tKnown suffixes: %s\n' % suffix_string +
         '\tYou can specify the file type by prepending one of\n' +
         '\t%s\n' % prefix_string +
         '\tto the file name (eg. dsn6:mydata).\n')
  return msg
  
# -----------------------------------------------------------------------------
#
def open_file(path, file_type = None, **kw):

  if file_type is None:
    file_type = file_type_from_suffix(path)
    if file_type is None:
      file_type, path = file_type_from_colon_specifier(path)
      if file_type is None:
        raise UnknownFileType(path)

  fmt = file_format_by_name(file_type)
  open_func = fmt.open_func

  apath = absolute_path(path)

  if kw:
    from inspect import getfullargspec
    args = getfullargspec(open_func).args
    okw = {name:value for name, value in kw.items() if name in args}
  else:
    okw = {}

  data = open_func(apath, **okw)
  
  return data

# -----------------------------------------------------------------------------
#
def file_type_from_suffix(path):
    
  for ff in file_formats:
    for suffix in ff.suffixes:
      if has_suffix(path, suffix):
        return ff.name
  return None

# -----------------------------------------------------------------------------
#
def file_type_from_colon_specifier(path):

  try:
    colon_position = path.index(':')
  except ValueError:
    return None, path
  
  first_part = path[:colon_position]
  last_part = path[colon_position+1:]

  prefixes = sum([ff.prefixes for ff in file_formats], [])
  if first_part in prefixes:
    return first_part, last_part

  return None, path

# -----------------------------------------------------------------------------
#
def file_format_by_name(name):
  for ff in file_formats:
    if ff.name == name or name in ff.suffixes or name in ff.prefixes:
      return ff
  raise ValueError('Unknown map file format %s' % name)

# -----------------------------------------------------------------------------
#
def has_suffix(path, suffix):

  parts = path.split('.')
  if len(parts) >= 2:
    return parts[-1].lower() == suffix
  return False

# -----------------------------------------------------------------------------
#
def absolute_path(path):

  from os.path import abspath
  if isinstance(path, str) and len(path) > 0:
    apath = abspath(path)
  else:
    apath = path
  return apath
