# Copyright 2023 The HuggingFace Team. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from setuptools import find_packages, setup


VERSION = "0.1.0"

extras = {}
extras["quality"] = [
    "black",
    "ruff~=0.2.1",
]
extras["typing"] = [
    "mypy",
    "pytest",
    "PyWavelets",
]
extras["dev"] = extras["quality"] + ["nox"]
extras["test"] = [
    "pytest",
    "pytest-cov",
    "pytest-xdist",
    "PyWavelets",
]

setup(
    name="ptdwt",
    version=VERSION,
    description="Discrete wavelet transforms with boundary taint analysis in PyTorch",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    keywords="wavelets discrete wavelet transform pytorch",
    license="Apache",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"ptdwt": ["py.typed"]},
    entry_points={},
    python_requires=">=3.9.0",
    install_requires=[
        "numpy>=1.17",
        "torch>=1.13.0",
        "typing_extensions",
    ],
    extras_require=extras,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
)

# Release checklist
# 1. Change the version in __init__.py and setup.py to the release version, e.g. from "0.1.0" to "0.2.0"
# 2. Run `nox -s test` and `nox -s build` in the top-level directory.
# 3. Add a tag in git to mark the release: "git tag -a VERSION -m 'Adds tag VERSION for pypi' "
#    Push the tag to git:
#      git push --tags origin main
# 4. Upload the package to the pypi test server first:
#      twine upload dist/* -r pypitest
# 5. Check that you can install it in a virtualenv by running:
#      pip install -i https://testpypi.python.org/pypi --extra-index-url https://pypi.org/simple ptdwt
# 6. Upload the final version to actual pypi:
#      twine upload dist/* -r pypi
