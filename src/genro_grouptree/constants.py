# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tables shared by the group tree: source trees, file types, products."""

from __future__ import annotations

# Stored source tree values.
ABSOLUTE = '<absolute>'
GROUP = '<group>'
SOURCE_ROOT = 'SOURCE_ROOT'
DEVELOPER_DIR = 'DEVELOPER_DIR'
BUILT_PRODUCTS_DIR = 'BUILT_PRODUCTS_DIR'
SDKROOT = 'SDKROOT'

SOURCE_TREES_BY_KEY: dict[str, str] = {
    'absolute': ABSOLUTE,
    'group': GROUP,
    'source_root': SOURCE_ROOT,
    'project': SOURCE_ROOT,
    'developer_dir': DEVELOPER_DIR,
    'built_products_dir': BUILT_PRODUCTS_DIR,
    'built_products': BUILT_PRODUCTS_DIR,
    'sdk_root': SDKROOT,
}

SOURCE_TREE_VALUES: frozenset[str] = frozenset(SOURCE_TREES_BY_KEY.values())

MAIN_GROUP_DISPLAY_NAME = 'Main Group'

DEFAULT_VERSION_GROUP_TYPE = 'wrapper.xcdatamodel'

# Keyed by extension without the leading dot, lower case.
FILE_TYPES_BY_EXTENSION: dict[str, str] = {
    'a': 'archive.ar',
    'apns': 'text',
    'app': 'wrapper.application',
    'appex': 'wrapper.app-extension',
    'bundle': 'wrapper.plug-in',
    'c': 'sourcecode.c.c',
    'cc': 'sourcecode.cpp.cpp',
    'cpp': 'sourcecode.cpp.cpp',
    'css': 'text.css',
    'dylib': 'compiled.mach-o.dylib',
    'entitlements': 'text.plist.entitlements',
    'framework': 'wrapper.framework',
    'gif': 'image.gif',
    'gpx': 'text.xml',
    'h': 'sourcecode.c.h',
    'hpp': 'sourcecode.cpp.h',
    'html': 'text.html',
    'jpeg': 'image.jpeg',
    'jpg': 'image.jpeg',
    'js': 'sourcecode.javascript',
    'json': 'text.json',
    'm': 'sourcecode.c.objc',
    'markdown': 'text',
    'md': 'net.daringfireball.markdown',
    'mdimporter': 'wrapper.cfbundle',
    'metal': 'sourcecode.metal',
    'modulemap': 'sourcecode.module',
    'mov': 'video.quicktime',
    'mp3': 'audio.mp3',
    'mm': 'sourcecode.cpp.objcpp',
    'nib': 'wrapper.nib',
    'octest': 'wrapper.cfbundle',
    'pch': 'sourcecode.c.h',
    'plist': 'text.plist.xml',
    'png': 'image.png',
    'rb': 'text.script.ruby',
    'sh': 'text.script.sh',
    'sks': 'file.sks',
    'storyboard': 'file.storyboard',
    'strings': 'text.plist.strings',
    'stringsdict': 'text.plist.stringsdict',
    'swift': 'sourcecode.swift',
    'tbd': 'sourcecode.text-based-dylib-definition',
    'ttf': 'file',
    'txt': 'text',
    'xcassets': 'folder.assetcatalog',
    'xcconfig': 'text.xcconfig',
    'xcdatamodel': 'wrapper.xcdatamodel',
    'xcframework': 'wrapper.xcframework',
    'xcodeproj': 'wrapper.pb-project',
    'xctest': 'wrapper.cfbundle',
    'xib': 'file.xib',
    'xml': 'text.xml',
    'xpc': 'wrapper.xpc-service',
    'zip': 'archive.zip',
}

PRODUCT_UTI_EXTENSIONS: dict[str, str] = {
    'application': 'app',
    'app_extension': 'appex',
    'bundle': 'bundle',
    'command_line_tool': '',
    'dynamic_library': 'dylib',
    'framework': 'framework',
    'static_library': 'a',
    'ui_test_bundle': 'xctest',
    'unit_test_bundle': 'xctest',
    'watch2_app': 'app',
    'watch2_extension': 'appex',
    'xpc_service': 'xpc',
}
