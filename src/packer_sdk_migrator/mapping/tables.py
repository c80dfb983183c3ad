"""
Static import path tables for the Packer core to plugin SDK move.

Three kinds of moves happened when the SDK was carved out of Packer core:

- ONE_TO_ONE_REPLACEMENTS: the package moved without changing its name, so
  only the import path changes.
- PACKAGE_RENAME: the package moved and its name changed, so references in
  expressions must use the new name too.
- PACKAGE_SPLIT: the package was broken up; each exported identifier landed
  in one of several destination packages.
"""

ONE_TO_ONE_REPLACEMENTS = {
    "github.com/hashicorp/packer/common/adapter": "github.com/hashicorp/packer-plugin-sdk/adapter",
    "github.com/hashicorp/packer/common/bootcommand": "github.com/hashicorp/packer-plugin-sdk/bootcommand",
    "github.com/hashicorp/packer/common/chroot": "github.com/hashicorp/packer-plugin-sdk/chroot",
    "github.com/hashicorp/packer/helper/communicator": "github.com/hashicorp/packer-plugin-sdk/communicator",
    "github.com/hashicorp/packer/helper/config": "github.com/hashicorp/packer-plugin-sdk/template/config",
    "github.com/hashicorp/packer/template/interpolate": "github.com/hashicorp/packer-plugin-sdk/template/interpolate",
    "github.com/hashicorp/packer/helper/multistep": "github.com/hashicorp/packer-plugin-sdk/multistep",
    "github.com/hashicorp/packer/common/net": "github.com/hashicorp/packer-plugin-sdk/net",
    "github.com/hashicorp/packer/packer": "github.com/hashicorp/packer-plugin-sdk/packer",
    "github.com/hashicorp/packer/packer/plugin": "github.com/hashicorp/packer-plugin-sdk/plugin",
    "github.com/hashicorp/packer/common/retry": "github.com/hashicorp/packer-plugin-sdk/retry",
    "github.com/hashicorp/packer/packer/rpc": "github.com/hashicorp/packer-plugin-sdk/rpc",
    "github.com/hashicorp/packer/template/interpolate/aws/secretsmanager": "github.com/hashicorp/packer-plugin-sdk/template/interpolate/aws/secretsmanager",
    "github.com/hashicorp/packer/common/shell": "github.com/hashicorp/packer-plugin-sdk/shell",
    "github.com/hashicorp/packer/common/shell-local": "github.com/hashicorp/packer-plugin-sdk/shell-local",
    "github.com/hashicorp/packer/common/shutdowncommand": "github.com/hashicorp/packer-plugin-sdk/shutdowncommand",
    "github.com/hashicorp/packer/helper/ssh": "github.com/hashicorp/packer-plugin-sdk/communicator/ssh",
    "github.com/hashicorp/packer/helper/communicator/sshkey": "github.com/hashicorp/packer-plugin-sdk/communicator/sshkey",
    "github.com/hashicorp/packer/template": "github.com/hashicorp/packer-plugin-sdk/template",
    "github.com/hashicorp/packer/communicator/winrm": "github.com/hashicorp/packer-plugin-sdk/sdk-internals/communicator/winrm",
    "github.com/hashicorp/packer/common/uuid": "github.com/hashicorp/packer-plugin-sdk/uuid",
}

PACKAGE_RENAME = {
    "github.com/hashicorp/packer/provisioner": "github.com/hashicorp/packer-plugin-sdk/guestexec",
    "github.com/hashicorp/packer/builder": "github.com/hashicorp/packer-plugin-sdk/packerbuilderdata",
    "github.com/hashicorp/packer/helper/builder/testing": "github.com/hashicorp/packer-plugin-sdk/acctest",
}

# old path -> {new path: [identifiers that moved there]}
PACKAGE_SPLIT = {
    "github.com/hashicorp/packer/common": {
        "github.com/hashicorp/packer-plugin-sdk/common": [
            "BuildNameConfigKey", "BuilderTypeConfigKey", "CoreVersionConfigKey",
            "DebugConfigKey", "ForceConfigKey", "OnErrorConfigKey", "TemplatePathKey",
            "UserVariablesConfigKey", "PackerConfig", "CommandWrapper", "ShellCommand",
        ],
        "github.com/hashicorp/packer-plugin-sdk/multistep/commonsteps": [
            "CDConfig", "FloppyConfig", "HTTPConfig", "ISOConfig", "StepCleanupTempKeys",
            "StepCreateCD", "StepCreateFloppy", "StepDownload", "StepHTTPServer",
            "StepOutputDir", "StepProvision", "NewGuestCommands", "MultistepDebugFn",
            "NewRunner", "NewRunnerWithPauseFn", "PopulateProvisionHookData",
        ],
    },
    "github.com/hashicorp/packer/hcl2template": {
        "github.com/hashicorp/packer-plugin-sdk/hcl2helper": [
            "NestedMockConfig", "MockTag", "MockConfig", "NamedMapStringString",
            "NamedString", "FlatMockConfig", "FlatMockTag", "FlatNestedMockConfig",
            "HCL2ValueFromConfigValue",
        ],
        "github.com/hashicorp/packer-plugin-sdk/template/config": [
            "KeyValue", "KeyValues", "KeyValueFilter", "NameValue", "NameValues",
            "NameValueFilter", "FlatKeyValue", "FlatKeyValueFilter", "FlatNameValue",
            "FlatNameValueFilter",
        ],
    },
}
