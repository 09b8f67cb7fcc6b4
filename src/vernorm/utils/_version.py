# SPDX-License-Identifier: Apache-2.0
# Copyright Contributors to the Vernorm Project


_vernorm_version = "1.2.0"
