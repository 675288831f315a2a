from pinas.pkgs.base import PackageManager


class DebianPackageManager(PackageManager):
    def update(self):
        self.mutator.run(["apt-get", "update"])

    def install(self, *packages):
        self.mutator.run(["apt-get", "install", "-y", *packages])
